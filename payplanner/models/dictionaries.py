"""
Lookup (dictionary) models referenced by payments
"""

from payplanner.models import db
from payplanner.models.base import BaseModel
from payplanner.models.enums import PaymentType

class DictionaryModel(BaseModel):
    """Common columns of every lookup table"""
    __abstract__ = True

    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.String(500), nullable=False, default='')
    is_active = db.Column(db.Boolean, nullable=False, default=True)

class IncomeType(DictionaryModel):
    """Income category; constrains which payment type may use it"""
    __tablename__ = 'income_types'

    color_hex = db.Column(db.String(7), nullable=False, default='#10B981')
    payment_type = db.Column(db.Enum(PaymentType), nullable=False, default=PaymentType.Income, index=True)

class DealType(DictionaryModel):
    __tablename__ = 'deal_types'

    color_hex = db.Column(db.String(7), nullable=False, default='#3B82F6')

class PaymentSource(DictionaryModel):
    __tablename__ = 'payment_sources'

    color_hex = db.Column(db.String(7), nullable=False, default='#6B7280')

class PaymentStatusEntity(DictionaryModel):
    __tablename__ = 'payment_statuses'

    color_hex = db.Column(db.String(7), nullable=False, default='#6B7280')
