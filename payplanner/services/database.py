"""
Database service for table creation and default lookup data
"""

import logging
from payplanner.models import db, DealType, IncomeType, PaymentSource, PaymentStatusEntity, PaymentType

logger = logging.getLogger(__name__)

DEFAULT_DEAL_TYPES = [
    {'name': 'Consulting', 'description': 'Professional consulting services', 'color_hex': '#3B82F6'},
    {'name': 'Product sale', 'description': 'Direct product sales', 'color_hex': '#10B981'},
    {'name': 'Subscription', 'description': 'Recurring subscription services', 'color_hex': '#8B5CF6'},
    {'name': 'Project', 'description': 'Fixed-scope project work', 'color_hex': '#F59E0B'},
    {'name': 'Maintenance', 'description': 'Long-term maintenance contracts', 'color_hex': '#EF4444'},
]

DEFAULT_INCOME_TYPES = [
    {'name': 'Service income', 'description': 'Income from services rendered',
     'color_hex': '#10B981', 'payment_type': PaymentType.Income},
    {'name': 'Other income', 'description': 'Other income', 'color_hex': '#064E3B',
     'payment_type': PaymentType.Income},
    {'name': 'Other expenses', 'description': 'Miscellaneous expenses', 'color_hex': '#991B1B',
     'payment_type': PaymentType.Expense},
]

DEFAULT_PAYMENT_SOURCES = [
    {'name': 'Bank transfer', 'description': 'Direct bank transfer', 'color_hex': '#6B7280'},
    {'name': 'Bank card', 'description': 'Card payment', 'color_hex': '#4B5563'},
    {'name': 'PayPal', 'description': 'Payment via PayPal', 'color_hex': '#374151'},
    {'name': 'Cheque', 'description': 'Bank cheque', 'color_hex': '#1F2937'},
    {'name': 'Cash', 'description': 'Cash payment', 'color_hex': '#111827'},
]

DEFAULT_PAYMENT_STATUSES = [
    {'name': 'Pending', 'description': 'Payment is expected', 'color_hex': '#F59E0B'},
    {'name': 'Completed', 'description': 'Payment completed', 'color_hex': '#10B981'},
    {'name': 'Overdue', 'description': 'Payment is past due', 'color_hex': '#EF4444'},
]

class DatabaseService:
    """Service for database operations and initialization"""

    def create_tables(self):
        """Create all database tables"""
        try:
            db.create_all()
            logger.info("Database tables created")
        except Exception:
            logger.exception("Error creating database tables")
            raise

    def seed_dictionaries(self):
        """Insert default lookup rows into empty tables"""
        seeds = (
            (DealType, DEFAULT_DEAL_TYPES),
            (IncomeType, DEFAULT_INCOME_TYPES),
            (PaymentSource, DEFAULT_PAYMENT_SOURCES),
            (PaymentStatusEntity, DEFAULT_PAYMENT_STATUSES),
        )
        try:
            for model, rows in seeds:
                if model.query.first() is not None:
                    continue
                db.session.add_all([model(**row) for row in rows])
                logger.info("Seeded %s rows into %s", len(rows), model.__tablename__)
            db.session.commit()
        except Exception:
            db.session.rollback()
            logger.exception("Error seeding lookup tables")
            raise
