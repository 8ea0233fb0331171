"""
Storage backend selection: the guest user lives in the local JSON store,
everyone else in DynamoDB. Callers only ever see plain expense dicts.
"""
import logging
from typing import Any, Dict, List

from smartspend.core.exceptions import NotFoundError, StorageError
from smartspend.db import dynamo, local_store
from smartspend.models.expense import ExpenseCreate, ExpenseInDB, ExpensePublic
from smartspend.models.user import GUEST_USER_ID

logger = logging.getLogger(__name__)


def is_guest(user_id: str) -> bool:
    return user_id == GUEST_USER_ID


def list_expenses(user_id: str) -> List[Dict[str, Any]]:
    if not user_id:
        return []
    if is_guest(user_id):
        return local_store.get_expenses(user_id)
    return [
        ExpensePublic(**item).model_dump()
        for item in dynamo.get_expenses_for_user(user_id)
    ]


def add_expenses(user_id: str, new_expenses: List[ExpenseCreate]) -> List[Dict[str, Any]]:
    """Assign ``id``/``createdAt`` and persist. Returns the stored records."""
    records = [ExpenseInDB(user_id=user_id, **item.model_dump()) for item in new_expenses]
    public = [ExpensePublic(**record.model_dump()).model_dump() for record in records]

    if is_guest(user_id):
        local_store.add_expenses(user_id, public)
    elif not dynamo.put_expenses([record.model_dump() for record in records]):
        raise StorageError("Failed to save expenses")

    logger.info(f"Stored {len(public)} expense(s) for user {user_id}")
    return public


def delete_expense(user_id: str, expense_id: str) -> None:
    if is_guest(user_id):
        deleted = local_store.delete_expense(user_id, expense_id)
    else:
        deleted = dynamo.delete_expense(user_id, expense_id)
    if not deleted:
        raise NotFoundError("Expense not found")
    logger.info(f"Deleted expense {expense_id} for user {user_id}")
