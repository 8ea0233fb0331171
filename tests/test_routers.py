from datetime import datetime
from unittest.mock import patch

from smartspend.core.security import get_password_hash
from smartspend.models.expense import ExpenseCreate


def _today():
    return datetime.utcnow().strftime("%Y-%m-%d")


def _add(client, headers, *expenses):
    response = client.post("/api/expenses/", json={"expenses": list(expenses)}, headers=headers)
    assert response.status_code == 201
    return response.json()


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_token_required(client):
    assert client.get("/api/summary/").status_code == 401
    response = client.get("/api/summary/", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401
    assert response.json() == {"detail": "Invalid token"}


def test_guest_profile(client, guest_headers):
    response = client.get("/api/auth/me", headers=guest_headers)
    assert response.json()["is_guest"] is True


def test_expense_lifecycle(client, guest_headers):
    today = _today()
    added = _add(
        client,
        guest_headers,
        {"item": "Lunch", "amount": 250, "category": "Food", "date": today},
        {"item": "Cab", "amount": 150, "category": "Transport", "date": today},
    )
    assert len(added) == 2

    listed = client.get("/api/expenses/", headers=guest_headers).json()
    assert {e["id"] for e in listed} == {e["id"] for e in added}

    summary = client.get("/api/summary/", headers=guest_headers).json()
    assert summary["dailyTotal"] == 400.0
    assert summary["categoryBreakdown"][0] == {"name": "Food", "value": 250.0, "percentage": 62.5}

    response = client.delete(f"/api/expenses/{added[0]['id']}", headers=guest_headers)
    assert response.status_code == 204
    assert client.delete(f"/api/expenses/{added[0]['id']}", headers=guest_headers).status_code == 404
    assert len(client.get("/api/expenses/", headers=guest_headers).json()) == 1


def test_rejects_invalid_expense(client, guest_headers):
    response = client.post(
        "/api/expenses/",
        json={"expenses": [{"item": "Bad", "amount": -1, "date": "2024-01-01"}]},
        headers=guest_headers,
    )
    assert response.status_code == 422


def test_breakdown_and_transactions(client, guest_headers):
    today = _today()
    _add(
        client,
        guest_headers,
        {"item": "Lunch", "amount": 300, "category": "Food", "date": today},
        {"item": "Snack", "amount": 100, "category": "Food", "date": "2000-01-01"},
        {"item": "Movie", "amount": 100, "category": "Fun", "date": today},
    )
    breakdown = client.get("/api/summary/breakdown?timeframe=All-Time", headers=guest_headers).json()
    assert [(b["name"], b["percentage"]) for b in breakdown] == [("Food", 80.0), ("Fun", 20.0)]

    food = client.get("/api/summary/transactions?category=Food&timeframe=Daily", headers=guest_headers).json()
    assert [e["item"] for e in food] == ["Lunch"]

    assert client.get("/api/summary/breakdown?timeframe=Yearly", headers=guest_headers).status_code == 400


def test_calendar_endpoints(client, guest_headers):
    _add(
        client,
        guest_headers,
        {"item": "Tea", "amount": 20, "category": "Food", "date": "2024-01-02"},
        {"item": "Rent", "amount": 500, "category": "Rent", "date": "2024-01-10"},
    )

    assert client.get("/api/calendar/daily", headers=guest_headers).json() == {
        "2024-01-02": 20.0,
        "2024-01-10": 500.0,
    }

    weekly = client.get("/api/calendar/weekly?year=2024", headers=guest_headers).json()
    assert [w["weekNum"] for w in weekly] == [2, 1]

    monthly = client.get("/api/calendar/monthly?year=2024", headers=guest_headers).json()
    assert len(monthly) == 12
    assert monthly[0]["total"] == 520.0

    day = client.get("/api/calendar/day/2024-01-02", headers=guest_headers).json()
    assert [e["item"] for e in day] == ["Tea"]

    week = client.get("/api/calendar/week/2024/1", headers=guest_headers).json()
    assert week == [{"date": "2024-01-02", "total": 20.0, "expenses": day}]

    month = client.get("/api/calendar/month/2024/0", headers=guest_headers).json()
    assert [m["weekNum"] for m in month] == [1, 2]

    assert client.get("/api/calendar/month/2024/12", headers=guest_headers).status_code == 422


def test_export_csv(client, guest_headers):
    assert client.get("/api/export/csv", headers=guest_headers).status_code == 404

    _add(client, guest_headers, {"item": "Tea", "amount": 20, "category": "Food", "date": "2024-01-02"})
    response = client.get("/api/export/csv", headers=guest_headers)
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "expenses_export_" in response.headers["content-disposition"]
    assert response.text.splitlines() == ["Date,Item,Category,Amount (INR)", "2024-01-02,Tea,Food,20.00"]


def test_parse_endpoint_stores_results(client, guest_headers, gemini):
    gemini.parse_expense_text.return_value = [
        ExpenseCreate(item="Coffee", amount=120, category="Food", date="2024-03-14"),
    ]
    response = client.post("/api/expenses/parse", json={"text": "coffee 120 yesterday"}, headers=guest_headers)
    assert response.status_code == 201
    assert response.json()["expenses"][0]["item"] == "Coffee"
    gemini.parse_expense_text.assert_called_once_with("coffee 120 yesterday", None)
    assert len(client.get("/api/expenses/", headers=guest_headers).json()) == 1


def test_parse_endpoint_nothing_found(client, guest_headers, gemini):
    gemini.parse_expense_text.return_value = []
    response = client.post("/api/expenses/parse", json={"text": "hello"}, headers=guest_headers)
    assert response.json()["expenses"] == []
    assert "Could not identify" in response.json()["message"]


def test_assistant_endpoints(client, guest_headers, gemini):
    gemini.generate_insights.return_value = "- all good"
    gemini.chat.return_value = "You spent 0."
    assert client.get("/api/assistant/insights", headers=guest_headers).json() == {"insight": "- all good"}
    reply = client.post("/api/assistant/chat", json={"message": "How much?"}, headers=guest_headers)
    assert reply.json() == {"reply": "You spent 0."}


class TestAuth:
    def test_register(self, client):
        with patch("smartspend.routers.auth.dynamo") as mock_dynamo:
            mock_dynamo.get_user_by_email.return_value = None
            mock_dynamo.put_user.return_value = True
            response = client.post(
                "/api/auth/register",
                json={"name": "Asha", "email": "asha@gmail.com", "password": "secret1"},
            )
        assert response.status_code == 201
        assert response.json()["user"]["email"] == "asha@gmail.com"
        assert response.json()["access_token"]

    def test_register_existing_email(self, client):
        with patch("smartspend.routers.auth.dynamo") as mock_dynamo:
            mock_dynamo.get_user_by_email.return_value = {"user_id": "u1"}
            response = client.post(
                "/api/auth/register",
                json={"name": "Asha", "email": "asha@gmail.com", "password": "secret1"},
            )
        assert response.status_code == 400
        assert response.json()["detail"] == "Email is already in use."

    def test_login(self, client):
        stored = {
            "user_id": "u1",
            "name": "Asha",
            "email": "asha@gmail.com",
            "password_hash": get_password_hash("secret1"),
        }
        with patch("smartspend.routers.auth.dynamo") as mock_dynamo:
            mock_dynamo.get_user_by_email.return_value = stored
            ok = client.post("/api/auth/login", json={"email": "asha@gmail.com", "password": "secret1"})
            bad = client.post("/api/auth/login", json={"email": "asha@gmail.com", "password": "nope"})
        assert ok.status_code == 200
        assert ok.json()["user"]["user_id"] == "u1"
        assert bad.status_code == 401
        assert bad.json()["detail"] == "Incorrect password."
