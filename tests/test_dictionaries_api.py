from payplanner.models import DealType, IncomeType, PaymentType
from payplanner.services.database import DEFAULT_DEAL_TYPES, DatabaseService


def test_seed_dictionaries_is_idempotent(app, db_session) -> None:
    service = DatabaseService()

    service.seed_dictionaries()
    service.seed_dictionaries()

    assert DealType.query.count() == len(DEFAULT_DEAL_TYPES)
    assert IncomeType.query.filter_by(payment_type=PaymentType.Expense).count() == 1


def test_income_types_filter_by_payment_type(client, make_income_type) -> None:
    make_income_type(name="Consulting fees")
    make_income_type(name="Office rent", payment_type=PaymentType.Expense)
    make_income_type(name="Archived", is_active=False)

    expenses = client.get("/api/dictionaries/income-types?paymentType=expense").get_json()
    active = client.get("/api/dictionaries/income-types?isActive=true").get_json()

    assert [item["name"] for item in expenses] == ["Office rent"]
    assert [item["name"] for item in active] == ["Consulting fees", "Office rent"]


def test_lookup_tables_are_listed_by_name(app, client) -> None:
    DatabaseService().seed_dictionaries()

    names = [item["name"] for item in client.get("/api/dictionaries/payment-sources").get_json()]

    assert names == sorted(names)
    assert client.get("/api/dictionaries/deal-types").status_code == 200
    assert client.get("/api/dictionaries/payment-statuses").status_code == 200
    assert client.get("/api/dictionaries/unknown").status_code == 404


def test_create_income_type(client) -> None:
    response = client.post("/api/dictionaries/income-types",
                           json={"name": "  Royalties ", "paymentType": "Income", "colorHex": "#123456"})

    assert response.status_code == 201
    body = response.get_json()
    assert body["name"] == "Royalties"
    assert body["paymentType"] == "Income"
    assert body["colorHex"] == "#123456"


def test_create_income_type_validates_payload(client) -> None:
    assert client.post("/api/dictionaries/income-types", json={"name": ""}).status_code == 400
    assert client.post("/api/dictionaries/income-types",
                       json={"name": "X", "paymentType": "Refund"}).status_code == 400
