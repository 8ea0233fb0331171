"""
Dashboard Router
Rolling-window totals, category breakdowns and per-category transactions
"""
from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException, Query

from smartspend.db import repository
from smartspend.routers.auth import get_current_user_id
from smartspend.utils.analyzer import TIMEFRAMES, SummaryCalculator

router = APIRouter()
summary_calculator = SummaryCalculator()


def _check_timeframe(timeframe: str) -> str:
    if timeframe not in TIMEFRAMES:
        raise HTTPException(status_code=400, detail=f"timeframe must be one of {', '.join(TIMEFRAMES)}")
    return timeframe


@router.get("/")
def get_summary(user_id: str = Depends(get_current_user_id)) -> Dict:
    expenses = repository.list_expenses(user_id)
    return summary_calculator.summarize(expenses).to_dict()


@router.get("/breakdown")
def get_breakdown(
    timeframe: str = Query("Monthly"),
    user_id: str = Depends(get_current_user_id),
) -> List[Dict]:
    """Category split for the chart, relative to the timeframe's own total."""
    expenses = repository.list_expenses(user_id)
    in_frame = summary_calculator.filter_by_timeframe(expenses, _check_timeframe(timeframe))
    return [entry.to_dict() for entry in summary_calculator.category_breakdown(in_frame)]


@router.get("/transactions")
def get_category_transactions(
    category: str,
    timeframe: str = Query("Monthly"),
    user_id: str = Depends(get_current_user_id),
) -> List[Dict]:
    expenses = repository.list_expenses(user_id)
    return summary_calculator.category_transactions(expenses, category, _check_timeframe(timeframe))
