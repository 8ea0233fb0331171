"""
Guest-mode expense storage.

Guest data never leaves the machine running the API: each storage key maps
to one JSON file under ``GUEST_STORAGE_DIR``.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from smartspend.core.config import settings
from smartspend.models.user import GUEST_USER_ID

logger = logging.getLogger(__name__)

LOCAL_STORAGE_KEY_PREFIX = "smartspend_expenses"


def storage_key(user_id: str) -> str:
    if user_id == GUEST_USER_ID:
        return LOCAL_STORAGE_KEY_PREFIX
    return f"{LOCAL_STORAGE_KEY_PREFIX}_{user_id}"


def _path_for(user_id: str, base_dir: Optional[str] = None) -> Path:
    return Path(base_dir or settings.GUEST_STORAGE_DIR) / f"{storage_key(user_id)}.json"


def get_expenses(user_id: str, base_dir: Optional[str] = None) -> List[Dict[str, Any]]:
    """Return the stored list, or an empty list if missing or unreadable."""
    path = _path_for(user_id, base_dir)
    if not path.exists():
        return []
    try:
        with path.open(encoding="utf-8") as fp:
            data = json.load(fp)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Ignoring unreadable guest store {path}: {e}")
        return []
    return data if isinstance(data, list) else []


def save_expenses(user_id: str, expenses: List[Dict[str, Any]], base_dir: Optional[str] = None) -> None:
    path = _path_for(user_id, base_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fp:
        json.dump(expenses, fp)


def add_expenses(user_id: str, new_expenses: List[Dict[str, Any]], base_dir: Optional[str] = None) -> None:
    save_expenses(user_id, get_expenses(user_id, base_dir) + list(new_expenses), base_dir)


def delete_expense(user_id: str, expense_id: str, base_dir: Optional[str] = None) -> bool:
    current = get_expenses(user_id, base_dir)
    remaining = [exp for exp in current if exp.get("id") != expense_id]
    if len(remaining) == len(current):
        return False
    save_expenses(user_id, remaining, base_dir)
    return True
