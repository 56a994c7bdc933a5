"""
Client case model
"""

from payplanner.models import db
from payplanner.models.base import BaseModel
from payplanner.models.enums import ClientCaseStatus

class ClientCase(BaseModel):
    """A legal or business matter tracked for a client"""
    __tablename__ = 'client_cases'

    client_id = db.Column(db.Integer, db.ForeignKey('clients.id'), nullable=False, index=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.String(1000), nullable=False, default='')
    status = db.Column(db.Enum(ClientCaseStatus), nullable=False, default=ClientCaseStatus.Open)

    # Relationships
    client = db.relationship('Client', back_populates='cases')
    payments = db.relationship('Payment', back_populates='client_case', lazy='select')

    EDITABLE_FIELDS = ('title', 'description', 'status', 'client_id')

    def to_dict(self, include_payments=False, include_client=False):
        data = super().to_dict()
        if include_client and self.client is not None:
            data['client'] = self.client.to_dict()
        if include_payments:
            data['payments'] = [payment.to_dict() for payment in self.payments]
        return data
