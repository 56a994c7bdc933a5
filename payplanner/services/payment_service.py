"""
Payment service: reads and validated mutations for payments
"""

import logging
from datetime import date, datetime
from typing import Dict, Optional

from sqlalchemy.orm import selectinload

from payplanner.exceptions import DataValidationError, NotFoundError
from payplanner.models import (
    db, Payment, PaymentType, PaymentStatus, IncomeType, Client, ClientCase,
    DealType, PaymentSource, PaymentStatusEntity
)
from payplanner.models.base import utcnow
from payplanner.services.query import payment_pipeline
from payplanner.utils.validators import (
    normalize_optional_string, normalize_string, parse_bool, parse_datetime,
    parse_decimal, parse_enum, parse_int, require
)

logger = logging.getLogger(__name__)

# Statuses that never carry a paid state
UNSETTLED_STATUSES = (PaymentStatus.Cancelled, PaymentStatus.Processing)

def apply_payment_state(values: Dict, today: date, stored_paid_date: Optional[datetime] = None) -> Dict:
    """Derive status, is_paid and paid_date from the submitted values"""
    if values['status'] in UNSETTLED_STATUSES:
        values['is_paid'] = False
        values['paid_date'] = None
    elif values['is_paid']:
        paid_on = values['paid_date'] or stored_paid_date or values['date']
        paid_on = datetime(paid_on.year, paid_on.month, paid_on.day)
        values.update(status=PaymentStatus.Completed, paid_date=paid_on, date=paid_on)
    else:
        values['paid_date'] = None
        values['status'] = PaymentStatus.Overdue if values['date'].date() < today else PaymentStatus.Pending
    return values

class PaymentService:
    """Service for payment CRUD with income-type consistency checks"""

    # Optional references: payload key -> (column, model, label)
    REFERENCES = {
        'clientId': ('client_id', Client, 'ClientId'),
        'clientCaseId': ('client_case_id', ClientCase, 'ClientCaseId'),
        'dealTypeId': ('deal_type_id', DealType, 'DealTypeId'),
        'paymentSourceId': ('payment_source_id', PaymentSource, 'PaymentSourceId'),
        'paymentStatusId': ('payment_status_id', PaymentStatusEntity, 'PaymentStatusId'),
    }

    def __init__(self):
        self.pipeline = payment_pipeline

    def list(self, args):
        return self.pipeline.list(args)

    def page(self, args):
        return self.pipeline.page(args)

    def get(self, payment_id: int) -> Payment:
        """Get payment with its lookups eager-loaded"""
        payment = Payment.query.options(
            selectinload(Payment.client),
            selectinload(Payment.client_case),
            selectinload(Payment.deal_type),
            selectinload(Payment.income_type),
            selectinload(Payment.payment_source),
            selectinload(Payment.payment_status_entity),
        ).filter(Payment.id == payment_id).first()
        if payment is None:
            raise NotFoundError('Payment', payment_id)
        return payment

    def create(self, data: Dict) -> Payment:
        values = self._parse_payload(data)
        self._check_references(values)
        apply_payment_state(values, utcnow().date())

        payment = Payment(**values).save()
        logger.info("Created payment %s (%s %s)", payment.id, payment.type.name, payment.amount)
        return payment

    def update(self, payment_id: int, data: Dict) -> Payment:
        """Full replace of the editable field set"""
        payment = db.session.get(Payment, payment_id)
        if payment is None:
            raise NotFoundError('Payment', payment_id)

        values = self._parse_payload(data)
        self._check_references(values)
        apply_payment_state(values, utcnow().date(), stored_paid_date=payment.paid_date)

        for field in Payment.EDITABLE_FIELDS:
            setattr(payment, field, values[field])
        db.session.commit()
        logger.info("Updated payment %s", payment.id)
        return payment

    def delete(self, payment_id: int) -> None:
        payment = db.session.get(Payment, payment_id)
        if payment is None:
            raise NotFoundError('Payment', payment_id)
        payment.delete()
        logger.info("Deleted payment %s", payment_id)

    def check_income_type(self, income_type_id: Optional[int], payment_type: PaymentType) -> None:
        """A referenced income type must exist and carry the payment's type"""
        if income_type_id is None:
            return
        income_type = db.session.get(IncomeType, income_type_id)
        if income_type is None:
            raise DataValidationError("Unknown IncomeTypeId", 'incomeTypeId', income_type_id)
        if income_type.payment_type != payment_type:
            raise DataValidationError(
                "IncomeType.PaymentType mismatches payment.Type", 'incomeTypeId', income_type_id)

    def _check_references(self, values: Dict) -> None:
        self.check_income_type(values['income_type_id'], values['type'])
        for column, model, label in self.REFERENCES.values():
            ref_id = values[column]
            if ref_id is not None and db.session.get(model, ref_id) is None:
                raise DataValidationError(f"Unknown {label}", column, ref_id)

    def _parse_payload(self, data: Dict) -> Dict:
        """Map a camelCase payload onto column values"""
        data = data or {}
        values = {
            'date': parse_datetime(require(data.get('date'), 'date'), 'date'),
            'amount': parse_decimal(require(data.get('amount'), 'amount'), 'amount'),
            'type': parse_enum(require(data.get('type'), 'type'), PaymentType, 'type'),
            'status': parse_enum(data.get('status'), PaymentStatus, 'status') or PaymentStatus.Pending,
            'description': normalize_string(data.get('description')),
            'notes': normalize_string(data.get('notes')),
            'is_paid': bool(parse_bool(data.get('isPaid'), 'isPaid')),
            'paid_date': parse_datetime(data.get('paidDate'), 'paidDate'),
            'income_type_id': parse_int(data.get('incomeTypeId'), 'incomeTypeId'),
            'account': normalize_optional_string(data.get('account')),
            'account_date': parse_datetime(data.get('accountDate'), 'accountDate'),
        }
        for key, (column, _model, _label) in self.REFERENCES.items():
            values[column] = parse_int(data.get(key), key)
        return values
