"""
Database models package
Exports all models and database instance
"""

from flask_sqlalchemy import SQLAlchemy

# Global database instance
db = SQLAlchemy()

def init_db(app):
    """Initialize database with app"""
    db.init_app(app)

# Import all models
from .enums import PaymentType, PaymentStatus, ClientCaseStatus, UserActivityStatus
from .client import Client
from .client_case import ClientCase
from .dictionaries import IncomeType, DealType, PaymentSource, PaymentStatusEntity
from .payment import Payment
from .activity_log import UserActivityLog

__all__ = [
    'db', 'init_db',
    'PaymentType', 'PaymentStatus', 'ClientCaseStatus', 'UserActivityStatus',
    'Client', 'ClientCase', 'Payment',
    'IncomeType', 'DealType', 'PaymentSource', 'PaymentStatusEntity',
    'UserActivityLog'
]
