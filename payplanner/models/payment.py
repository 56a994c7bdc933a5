"""
Payment model
"""

from payplanner.models import db
from payplanner.models.base import BaseModel, camel_case
from payplanner.models.enums import PaymentType, PaymentStatus

class Payment(BaseModel):
    """Single income or expense transaction"""
    __tablename__ = 'payments'

    date = db.Column(db.DateTime, nullable=False, index=True)
    amount = db.Column(db.Numeric(18, 2), nullable=False)
    type = db.Column(db.Enum(PaymentType), nullable=False, default=PaymentType.Income)
    status = db.Column(db.Enum(PaymentStatus), nullable=False, default=PaymentStatus.Pending)
    description = db.Column(db.String(500), nullable=False, default='')
    notes = db.Column(db.Text, nullable=False, default='')
    is_paid = db.Column(db.Boolean, nullable=False, default=False)
    paid_date = db.Column(db.DateTime, nullable=True)
    account = db.Column(db.String(120), nullable=True)
    account_date = db.Column(db.DateTime, nullable=True)

    # Optional links; parents clear these before they are removed
    client_id = db.Column(db.Integer, db.ForeignKey('clients.id'), nullable=True, index=True)
    client_case_id = db.Column(db.Integer, db.ForeignKey('client_cases.id'), nullable=True, index=True)
    deal_type_id = db.Column(db.Integer, db.ForeignKey('deal_types.id'), nullable=True)
    income_type_id = db.Column(db.Integer, db.ForeignKey('income_types.id'), nullable=True)
    payment_source_id = db.Column(db.Integer, db.ForeignKey('payment_sources.id'), nullable=True)
    payment_status_id = db.Column(db.Integer, db.ForeignKey('payment_statuses.id'), nullable=True)

    # Relationships
    client = db.relationship('Client')
    client_case = db.relationship('ClientCase', back_populates='payments')
    deal_type = db.relationship('DealType')
    income_type = db.relationship('IncomeType')
    payment_source = db.relationship('PaymentSource')
    payment_status_entity = db.relationship('PaymentStatusEntity')

    EDITABLE_FIELDS = (
        'date', 'amount', 'type', 'status', 'description', 'notes',
        'is_paid', 'paid_date', 'client_id', 'client_case_id', 'deal_type_id',
        'income_type_id', 'payment_source_id', 'payment_status_id',
        'account', 'account_date',
    )

    LOOKUPS = ('client', 'client_case', 'deal_type', 'income_type', 'payment_source', 'payment_status_entity')

    def to_dict(self, include_lookups=False):
        data = super().to_dict()
        if include_lookups:
            for name in self.LOOKUPS:
                related = getattr(self, name)
                data[camel_case(name)] = related.to_dict() if related is not None else None
        return data
