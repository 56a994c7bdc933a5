from datetime import date, datetime

import pytest

from payplanner.models import Payment, PaymentStatus, PaymentType
from payplanner.services.payment_service import apply_payment_state


def _payload(**overrides):
    payload = {
        "date": "2024-05-10",
        "amount": 1250.5,
        "type": "Income",
        "status": "Pending",
        "description": "Retainer",
    }
    payload.update(overrides)
    return payload


def test_create_payment_with_matching_income_type(client, make_income_type) -> None:
    income_type = make_income_type(payment_type=PaymentType.Income)

    response = client.post("/api/v2/payments", json=_payload(incomeTypeId=income_type.id))

    assert response.status_code == 201
    body = response.get_json()
    assert body["incomeTypeId"] == income_type.id
    assert body["type"] == "Income"
    assert body["amount"] == 1250.5
    assert response.headers["Location"].endswith(f"/api/v2/payments/{body['id']}")


def test_create_payment_rejects_income_type_mismatch(client, make_income_type) -> None:
    expense_type = make_income_type(name="Rent", payment_type=PaymentType.Expense)

    response = client.post("/api/v1/payments", json=_payload(type="Income", incomeTypeId=expense_type.id))

    assert response.status_code == 400
    assert response.get_data(as_text=True) == "IncomeType.PaymentType mismatches payment.Type"
    assert Payment.query.count() == 0


def test_create_payment_rejects_unknown_income_type(client) -> None:
    response = client.post("/api/v1/payments", json=_payload(incomeTypeId=999))

    assert response.status_code == 400
    assert response.get_data(as_text=True) == "Unknown IncomeTypeId"
    assert Payment.query.count() == 0


def test_expense_payment_accepts_expense_income_type(client, make_income_type) -> None:
    expense_type = make_income_type(name="Rent", payment_type=PaymentType.Expense)

    response = client.post("/api/v1/payments", json=_payload(type="Expense", incomeTypeId=expense_type.id))

    assert response.status_code == 201
    assert response.get_json()["type"] == "Expense"


def test_update_rejects_mismatch_and_leaves_payment_unchanged(client, make_payment, make_income_type) -> None:
    income_type = make_income_type(payment_type=PaymentType.Income)
    payment = make_payment(amount="100", income_type_id=income_type.id)

    response = client.put(f"/api/v1/payments/{payment.id}",
                          json=_payload(type="Expense", amount=999, incomeTypeId=income_type.id))

    assert response.status_code == 400
    refreshed = client.get(f"/api/v1/payments/{payment.id}").get_json()
    assert refreshed["amount"] == 100.0
    assert refreshed["type"] == "Income"


def test_account_is_trimmed_and_blank_becomes_null(client) -> None:
    trimmed = client.post("/api/v1/payments", json=_payload(account="  ACC-42  ")).get_json()
    blank = client.post("/api/v1/payments", json=_payload(account="   ")).get_json()

    assert trimmed["account"] == "ACC-42"
    assert blank["account"] is None


def test_create_requires_date_amount_and_type(client) -> None:
    missing_date = client.post("/api/v1/payments", json=_payload(date=None))
    missing_amount = client.post("/api/v1/payments", json=_payload(amount=""))
    bad_type = client.post("/api/v1/payments", json=_payload(type="Refund"))

    assert missing_date.status_code == 400
    assert "'date' is required" == missing_date.get_data(as_text=True)
    assert missing_amount.status_code == 400
    assert bad_type.status_code == 400


def test_create_rejects_unknown_client_reference(client) -> None:
    response = client.post("/api/v1/payments", json=_payload(clientId=12345))

    assert response.status_code == 400
    assert response.get_data(as_text=True) == "Unknown ClientId"


def test_update_is_full_replace(client, make_client, make_payment) -> None:
    owner = make_client()
    payment = make_payment(amount="75", client_id=owner.id, notes="keep me?", account="ACC-1")

    response = client.put(f"/api/v2/payments/{payment.id}", json=_payload(amount=80, isPaid=True))

    assert response.status_code == 200
    body = response.get_json()
    assert body["amount"] == 80.0
    assert body["isPaid"] is True
    assert body["clientId"] is None
    assert body["notes"] == ""
    assert body["account"] is None


def test_get_payment_includes_lookups(client, make_client, make_income_type, make_payment) -> None:
    owner = make_client(name="Northwind")
    income_type = make_income_type()
    payment = make_payment(client_id=owner.id, income_type_id=income_type.id)

    body = client.get(f"/api/v2/payments/{payment.id}").get_json()

    assert body["client"]["name"] == "Northwind"
    assert body["incomeType"]["paymentType"] == "Income"
    assert body["clientCase"] is None


def test_list_payments_does_not_embed_lookups(client, make_client, make_payment) -> None:
    owner = make_client()
    make_payment(client_id=owner.id)

    item = client.get("/api/v1/payments").get_json()[0]

    assert item["clientId"] == owner.id
    assert "client" not in item


def test_delete_payment_then_404(client, make_payment) -> None:
    payment = make_payment()

    deleted = client.delete(f"/api/v1/payments/{payment.id}")
    missing = client.get(f"/api/v1/payments/{payment.id}")

    assert deleted.status_code == 204
    assert deleted.get_data() == b""
    assert missing.status_code == 404


def test_unknown_ids_return_404(client) -> None:
    assert client.get("/api/v2/payments/404").status_code == 404
    assert client.put("/api/v2/payments/404", json=_payload()).status_code == 404
    assert client.delete("/api/v2/payments/404").status_code == 404


def test_non_object_body_returns_400(client) -> None:
    response = client.post("/api/v1/payments", json=[1, 2, 3])

    assert response.status_code == 400


def test_paid_payment_is_completed_on_its_paid_date(client) -> None:
    response = client.post("/api/v1/payments", json=_payload(date="2020-01-01", isPaid=True, status="Pending"))

    body = response.get_json()
    assert response.status_code == 201
    assert body["status"] == "Completed"
    assert body["isPaid"] is True
    assert body["paidDate"] == "2020-01-01T00:00:00"


def test_explicit_paid_date_becomes_payment_date(client) -> None:
    body = client.post("/api/v1/payments", json=_payload(
        date="2020-01-01", isPaid=True, paidDate="2020-01-05T16:45:00")).get_json()

    assert body["paidDate"] == "2020-01-05T00:00:00"
    assert body["date"] == "2020-01-05T00:00:00"


@pytest.mark.parametrize("status", ["Cancelled", "Processing"])
def test_cancelled_or_processing_clears_paid_state(client, status) -> None:
    body = client.post("/api/v1/payments", json=_payload(
        status=status, isPaid=True, paidDate="2020-01-05")).get_json()

    assert body["status"] == status
    assert body["isPaid"] is False
    assert body["paidDate"] is None


def test_unpaid_payment_status_follows_its_date(client) -> None:
    overdue = client.post("/api/v1/payments", json=_payload(date="2020-01-01", status="Completed")).get_json()
    upcoming = client.post("/api/v1/payments", json=_payload(date="2999-01-01", status="Overdue")).get_json()

    assert overdue["status"] == "Overdue"
    assert overdue["isPaid"] is False
    assert upcoming["status"] == "Pending"


def test_update_keeps_stored_paid_date_when_none_is_sent(client, make_payment) -> None:
    payment = make_payment(is_paid=True, status=PaymentStatus.Completed, paid_date=datetime(2024, 1, 20))

    body = client.put(f"/api/v1/payments/{payment.id}", json=_payload(isPaid=True)).get_json()

    assert body["status"] == "Completed"
    assert body["paidDate"] == "2024-01-20T00:00:00"


def test_apply_payment_state_uses_the_given_day() -> None:
    values = {"status": PaymentStatus.Pending, "is_paid": False, "paid_date": None,
              "date": datetime(2024, 3, 1, 9, 30)}

    assert apply_payment_state(dict(values), date(2024, 3, 1))["status"] is PaymentStatus.Pending
    assert apply_payment_state(dict(values), date(2024, 3, 2))["status"] is PaymentStatus.Overdue
