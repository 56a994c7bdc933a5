from payplanner.models import UserActivityStatus


def test_post_activity_record_returns_201(client, activity_logs) -> None:
    response = client.post("/api/user-activity", json={
        "category": "Reports",
        "action": "export",
        "status": "success",
        "metadata": {"rows": 12},
    })

    assert response.status_code == 201
    body = response.get_json()
    assert body["category"] == "Reports"
    assert body["status"] == "Success"
    assert body["metadata"] == {"rows": 12}
    assert "metadataJson" not in body
    assert len(activity_logs()) == 1


def test_post_activity_requires_category_and_action(client, activity_logs) -> None:
    response = client.post("/api/user-activity", json={"category": "Reports"})

    assert response.status_code == 400
    assert response.get_data(as_text=True) == "'action' is required"
    assert activity_logs() == []


def test_post_activity_returns_500_when_write_fails(app, client, monkeypatch) -> None:
    from payplanner.services.activity_service import UserActivityService

    monkeypatch.setattr(UserActivityService, "try_write", lambda self, entry: None)

    response = client.post("/api/user-activity", json={"category": "Reports", "action": "export"})

    assert response.status_code == 500


def test_list_is_newest_first_with_clamped_page_size(client) -> None:
    for action in ("first", "second", "third"):
        client.post("/api/user-activity", json={"category": "UI", "action": action})

    body = client.get("/api/user-activity?pageSize=3").get_json()

    assert body["pageSize"] == 10
    assert body["total"] == 3
    assert [item["action"] for item in body["items"]] == ["third", "second", "first"]

    capped = client.get("/api/user-activity?pageSize=1000").get_json()
    assert capped["pageSize"] == 200


def test_list_filters_by_status_and_category(client) -> None:
    client.post("/api/user-activity", json={"category": "UI", "action": "open"})
    client.post("/api/v1/cases", json={"title": "", "clientId": 1})
    client.get("/api/v1/clients")

    warnings = client.get("/api/user-activity?status=warning").get_json()
    clients = client.get("/api/user-activity?category=Clients").get_json()

    assert [item["category"] for item in warnings["items"]] == ["Cases"]
    assert [item["action"] for item in clients["items"]] == ["list"]
    assert clients["items"][0]["status"] == UserActivityStatus.Success.name


def test_invalid_activity_status_filter_returns_400(client) -> None:
    assert client.get("/api/user-activity?status=Exploded").status_code == 400


def test_filter_options_lists_distinct_values(client) -> None:
    with client.session_transaction() as session:
        session["user_id"] = 3
        session["user_email"] = "ops@example.com"

    client.get("/api/v1/clients")
    client.get("/api/v1/payments")
    client.get("/api/v1/payments")

    body = client.get("/api/user-activity/filters").get_json()

    assert body["categories"] == ["Clients", "Payments"]
    assert body["actions"] == ["list"]
    assert body["httpMethods"] == ["GET"]
    assert body["statuses"] == ["Info", "Success", "Warning", "Failure"]
    assert body["users"] == [{"userId": 3, "userEmail": "ops@example.com", "userFullName": None}]
