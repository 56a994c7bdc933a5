"""
Lookup table (dictionary) service
"""

import logging
from typing import Any, Dict, List, Mapping

from payplanner.exceptions import DataValidationError
from payplanner.models import DealType, IncomeType, PaymentSource, PaymentStatusEntity, PaymentType
from payplanner.utils.validators import normalize_optional_string, normalize_string, parse_bool, parse_enum, require

logger = logging.getLogger(__name__)

class DictionaryService:
    """Reads the lookup tables and creates income types"""

    MODELS = {
        'deal-types': DealType,
        'income-types': IncomeType,
        'payment-sources': PaymentSource,
        'payment-statuses': PaymentStatusEntity,
    }

    def list(self, kind: str, args: Mapping[str, Any] = None) -> List:
        """All rows of one lookup table ordered by name"""
        model = self.MODELS[kind]
        args = args or {}
        query = model.query

        is_active = parse_bool(args.get('isActive'), 'isActive')
        if is_active is not None:
            query = query.filter(model.is_active == is_active)

        if model is IncomeType:
            payment_type = parse_enum(args.get('paymentType'), PaymentType, 'paymentType')
            if payment_type is not None:
                query = query.filter(IncomeType.payment_type == payment_type)

        return query.order_by(model.name, model.id).all()

    def create_income_type(self, data: Dict) -> IncomeType:
        data = data or {}
        color_hex = normalize_optional_string(data.get('colorHex')) or '#10B981'
        if len(color_hex) > 7:
            raise DataValidationError("'colorHex' must be at most 7 characters", 'colorHex', color_hex)

        is_active = parse_bool(data.get('isActive'), 'isActive')
        income_type = IncomeType(
            name=normalize_string(require(data.get('name'), 'name')),
            description=normalize_string(data.get('description')),
            color_hex=color_hex,
            is_active=True if is_active is None else is_active,
            payment_type=parse_enum(data.get('paymentType'), PaymentType, 'paymentType') or PaymentType.Income,
        )
        income_type.save()
        logger.info("Created income type %s (%s)", income_type.name, income_type.payment_type.name)
        return income_type
