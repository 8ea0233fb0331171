from unittest.mock import patch

import pytest

from smartspend.core.config import settings
from smartspend.core.exceptions import NotFoundError, StorageError
from smartspend.db import repository
from smartspend.models.expense import ExpenseCreate


@pytest.fixture
def guest_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "GUEST_STORAGE_DIR", str(tmp_path))
    return tmp_path


def test_guest_uses_local_store(guest_dir):
    with patch("smartspend.db.repository.dynamo") as mock_dynamo:
        added = repository.add_expenses("guest", [ExpenseCreate(item="Tea", amount=20, category="Food", date="2024-01-05")])
        listed = repository.list_expenses("guest")

    mock_dynamo.put_expenses.assert_not_called()
    assert listed == added
    assert added[0]["id"]
    assert isinstance(added[0]["createdAt"], int)
    assert "user_id" not in added[0]


def test_authenticated_user_uses_dynamo():
    with patch("smartspend.db.repository.dynamo") as mock_dynamo:
        mock_dynamo.put_expenses.return_value = True
        added = repository.add_expenses("user123", [ExpenseCreate(item="Bus", amount=3.5, category="Transport", date="2024-01-05")])

    stored = mock_dynamo.put_expenses.call_args[0][0]
    assert stored[0]["user_id"] == "user123"
    assert stored[0]["id"] == added[0]["id"]


def test_dynamo_failure_raises_storage_error():
    with patch("smartspend.db.repository.dynamo") as mock_dynamo:
        mock_dynamo.put_expenses.return_value = False
        with pytest.raises(StorageError):
            repository.add_expenses("user123", [ExpenseCreate(item="Bus", amount=3.5, date="2024-01-05")])


def test_list_strips_storage_fields():
    with patch("smartspend.db.repository.dynamo") as mock_dynamo:
        mock_dynamo.get_expenses_for_user.return_value = [
            {"user_id": "user123", "id": "e1", "item": "Tea", "amount": 20, "category": "Food",
             "date": "2024-01-05", "createdAt": 1700000000000},
        ]
        listed = repository.list_expenses("user123")

    assert listed == [{"id": "e1", "item": "Tea", "amount": 20.0, "category": "Food",
                       "date": "2024-01-05", "createdAt": 1700000000000}]


def test_list_without_user():
    assert repository.list_expenses("") == []


def test_delete_missing_expense():
    with patch("smartspend.db.repository.dynamo") as mock_dynamo:
        mock_dynamo.delete_expense.return_value = False
        with pytest.raises(NotFoundError):
            repository.delete_expense("user123", "nope")
