"""
Pytest configuration and fixtures.
"""
from datetime import datetime
from decimal import Decimal

import pytest

from payplanner import create_app
from payplanner.models import (
    db, Client, ClientCase, ClientCaseStatus, IncomeType, Payment, PaymentStatus, PaymentType,
    UserActivityLog
)


@pytest.fixture
def app(tmp_path):
    """App bound to a throwaway SQLite file so audit writes get their own connection"""
    database_path = tmp_path / "payplanner-test.db"
    app = create_app("testing", {"SQLALCHEMY_DATABASE_URI": f"sqlite:///{database_path}"})
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db_session(app):
    return db.session


@pytest.fixture
def make_client(db_session):
    def _make(name="Acme LLC", **fields):
        record = Client(name=name, **fields)
        db_session.add(record)
        db_session.commit()
        return record
    return _make


@pytest.fixture
def make_case(db_session):
    def _make(client, title="Contract dispute", status=ClientCaseStatus.Open, **fields):
        record = ClientCase(client_id=client.id, title=title, status=status, **fields)
        db_session.add(record)
        db_session.commit()
        return record
    return _make


@pytest.fixture
def make_income_type(db_session):
    def _make(name="Service income", payment_type=PaymentType.Income, **fields):
        record = IncomeType(name=name, payment_type=payment_type, **fields)
        db_session.add(record)
        db_session.commit()
        return record
    return _make


@pytest.fixture
def make_payment(db_session):
    def _make(amount="100.00", date=datetime(2024, 1, 15), payment_type=PaymentType.Income, **fields):
        fields.setdefault("status", PaymentStatus.Pending)
        record = Payment(amount=Decimal(amount), date=date, type=payment_type, **fields)
        db_session.add(record)
        db_session.commit()
        return record
    return _make


@pytest.fixture
def activity_logs(db_session):
    """Audit rows written so far, oldest first"""
    def _logs():
        db_session.expire_all()
        return UserActivityLog.query.order_by(UserActivityLog.id).all()
    return _logs
