"""
Base model with common functionality
"""

import enum
from datetime import datetime, date
from decimal import Decimal
from payplanner.models import db

def utcnow():
    return datetime.utcnow()

def camel_case(name):
    head, *rest = name.split('_')
    return head + ''.join(part.title() for part in rest)

def serialize_value(value):
    """Convert a column value to a JSON friendly representation"""
    if isinstance(value, enum.Enum):
        return value.name
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    return value

class BaseModel(db.Model):
    """Base model with common fields and methods"""
    __abstract__ = True

    id = db.Column(db.Integer, primary_key=True)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    def save(self):
        """Save instance to database"""
        db.session.add(self)
        db.session.commit()
        return self

    def delete(self):
        """Delete instance from database"""
        db.session.delete(self)
        db.session.commit()

    def to_dict(self):
        """Convert model to a camelCase dictionary"""
        return {camel_case(c.name): serialize_value(getattr(self, c.name)) for c in self.__table__.columns}
