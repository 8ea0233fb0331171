"""
Assistant Router
Gemini insights and chat over the user's own spending data
"""
from typing import Dict

from fastapi import APIRouter, Depends

from smartspend.db import repository
from smartspend.models.expense import ChatRequest
from smartspend.routers.auth import get_current_user_id
from smartspend.routers.expenses import get_gemini_service
from smartspend.utils.analyzer import SummaryCalculator
from smartspend.utils.gemini_service import GeminiService

router = APIRouter()
summary_calculator = SummaryCalculator()


@router.get("/insights")
def get_insights(
    user_id: str = Depends(get_current_user_id),
    service: GeminiService = Depends(get_gemini_service),
) -> Dict:
    expenses = repository.list_expenses(user_id)
    summary = summary_calculator.summarize(expenses)
    return {"insight": service.generate_insights(expenses, summary)}


@router.post("/chat")
def chat(
    payload: ChatRequest,
    user_id: str = Depends(get_current_user_id),
    service: GeminiService = Depends(get_gemini_service),
) -> Dict:
    expenses = repository.list_expenses(user_id)
    summary = summary_calculator.summarize(expenses)
    return {"reply": service.chat(payload.message, expenses, summary)}
