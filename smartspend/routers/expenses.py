import logging
from typing import Dict, List

from fastapi import APIRouter, Depends, status

from smartspend.db import repository
from smartspend.models.expense import ExpenseBatchCreate, ExpensePublic, ParseRequest
from smartspend.routers.auth import get_current_user_id
from smartspend.utils.analyzer import SummaryCalculator
from smartspend.utils.gemini_service import GeminiService

router = APIRouter()
logger = logging.getLogger(__name__)
summary_calculator = SummaryCalculator()
gemini_service = GeminiService()


def get_gemini_service() -> GeminiService:
    return gemini_service


@router.get("/", response_model=List[ExpensePublic])
def list_expenses(user_id: str = Depends(get_current_user_id)):
    """Transaction history, newest first."""
    return summary_calculator.sort_for_history(repository.list_expenses(user_id))


@router.post("/", response_model=List[ExpensePublic], status_code=status.HTTP_201_CREATED)
def create_expenses(payload: ExpenseBatchCreate, user_id: str = Depends(get_current_user_id)):
    return repository.add_expenses(user_id, payload.expenses)


@router.post("/parse", status_code=status.HTTP_201_CREATED)
def parse_and_create_expenses(
    payload: ParseRequest,
    user_id: str = Depends(get_current_user_id),
    service: GeminiService = Depends(get_gemini_service),
) -> Dict:
    """
    Turn free text (typed or dictated) into expenses and store them.
    An empty result is not an error: nothing is stored and the caller is told why.
    """
    parsed = service.parse_expense_text(payload.text, payload.reference_date)
    if not parsed:
        logger.info(f"No expenses recognised for user {user_id}")
        return {
            "expenses": [],
            "message": "Could not identify any expenses. Please try a different format.",
        }
    return {"expenses": repository.add_expenses(user_id, parsed)}


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_expense(expense_id: str, user_id: str = Depends(get_current_user_id)):
    repository.delete_expense(user_id, expense_id)
    return None
