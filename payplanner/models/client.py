"""
Client model
"""

from payplanner.models import db
from payplanner.models.base import BaseModel

class Client(BaseModel):
    """Client of the firm; owns cases and is referenced by payments"""
    __tablename__ = 'clients'

    name = db.Column(db.String(200), nullable=False, default='')
    email = db.Column(db.String(200), nullable=False, default='')
    phone = db.Column(db.String(50), nullable=False, default='')
    company = db.Column(db.String(200), nullable=False, default='')
    address = db.Column(db.String(500), nullable=False, default='')
    notes = db.Column(db.Text, nullable=False, default='')
    is_active = db.Column(db.Boolean, nullable=False, default=True, index=True)

    # Relationships
    cases = db.relationship('ClientCase', back_populates='client', lazy='select')

    # Fields replaced by a full update
    EDITABLE_FIELDS = ('name', 'email', 'phone', 'company', 'address', 'notes', 'is_active')

    def to_dict(self, include_cases=False):
        data = super().to_dict()
        if include_cases:
            data['cases'] = [case.to_dict() for case in self.cases]
        return data
