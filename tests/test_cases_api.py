from decimal import Decimal

import pytest
from sqlalchemy.exc import SQLAlchemyError

from payplanner.models import ClientCase, Payment
from payplanner.services import CaseService


def test_delete_case_detaches_its_payments(client, db_session, make_client, make_case, make_payment) -> None:
    owner = make_client()
    doomed = make_case(owner, title="Case seven")
    first = make_payment(amount="100", client_id=owner.id, client_case_id=doomed.id, description="first")
    second = make_payment(amount="200", client_id=owner.id, client_case_id=doomed.id, description="second")
    first_id, second_id, case_id = first.id, second.id, doomed.id

    response = client.delete(f"/api/v1/cases/{case_id}")

    assert response.status_code == 204
    db_session.expire_all()
    assert db_session.get(ClientCase, case_id) is None
    for payment_id, amount, description in ((first_id, "100", "first"), (second_id, "200", "second")):
        payment = db_session.get(Payment, payment_id)
        assert payment is not None
        assert payment.client_case_id is None
        assert payment.client_id == owner.id
        assert payment.amount == Decimal(amount)
        assert payment.description == description


def test_delete_missing_case_returns_404(client) -> None:
    assert client.delete("/api/v1/cases/77").status_code == 404


def test_create_case_trims_title_and_defaults_status(client, make_client) -> None:
    owner = make_client()

    response = client.post("/api/v2/cases", json={"title": "  Lease review  ", "clientId": owner.id})

    assert response.status_code == 201
    body = response.get_json()
    assert body["title"] == "Lease review"
    assert body["status"] == "Open"
    assert response.headers["Location"].endswith(f"/api/v2/cases/{body['id']}")


def test_create_case_requires_title_and_existing_client(client, make_client) -> None:
    owner = make_client()

    blank_title = client.post("/api/v1/cases", json={"title": "   ", "clientId": owner.id})
    unknown_client = client.post("/api/v1/cases", json={"title": "Audit", "clientId": 999})

    assert blank_title.status_code == 400
    assert unknown_client.status_code == 400
    assert unknown_client.get_data(as_text=True) == "Unknown ClientId"


def test_get_case_includes_client_and_payments(client, make_client, make_case, make_payment) -> None:
    owner = make_client(name="Contoso")
    client_case = make_case(owner)
    make_payment(amount="10", client_case_id=client_case.id)

    body = client.get(f"/api/v1/cases/{client_case.id}").get_json()

    assert body["client"]["name"] == "Contoso"
    assert [payment["amount"] for payment in body["payments"]] == [10.0]


def test_update_case_changes_status(client, make_client, make_case) -> None:
    owner = make_client()
    client_case = make_case(owner)

    response = client.put(f"/api/v1/cases/{client_case.id}",
                          json={"title": "Closed out", "clientId": owner.id, "status": "closed"})

    assert response.status_code == 200
    assert response.get_json()["status"] == "Closed"


def test_failed_case_delete_keeps_payment_links(
        db_session, make_client, make_case, make_payment, monkeypatch) -> None:
    owner = make_client()
    client_case = make_case(owner)
    payment = make_payment(client_id=owner.id, client_case_id=client_case.id)
    case_id, payment_id = client_case.id, payment.id

    def failing_commit():
        raise SQLAlchemyError("disk I/O error")

    monkeypatch.setattr(db_session, "commit", failing_commit)
    with pytest.raises(SQLAlchemyError):
        CaseService().delete(case_id)
    monkeypatch.undo()

    db_session.expire_all()
    assert db_session.get(ClientCase, case_id) is not None
    assert db_session.get(Payment, payment_id).client_case_id == case_id
