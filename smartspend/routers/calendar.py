"""
Calendar Router
Daily / weekly / monthly buckets and their drill-down views
"""
from datetime import datetime
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Path, Query

from smartspend.db import repository
from smartspend.routers.auth import get_current_user_id
from smartspend.utils.calendar_view import CalendarAggregator

router = APIRouter()
aggregator = CalendarAggregator()


def _current_year() -> int:
    return datetime.utcnow().year


@router.get("/daily")
def get_daily_totals(user_id: str = Depends(get_current_user_id)) -> Dict[str, float]:
    return aggregator.daily_totals(repository.list_expenses(user_id))


@router.get("/weekly")
def get_weekly_summary(
    year: Optional[int] = Query(None),
    user_id: str = Depends(get_current_user_id),
) -> List[Dict]:
    expenses = repository.list_expenses(user_id)
    return [week.to_dict() for week in aggregator.weekly_summary(expenses, year or _current_year())]


@router.get("/monthly")
def get_monthly_summary(
    year: Optional[int] = Query(None),
    user_id: str = Depends(get_current_user_id),
) -> List[Dict]:
    expenses = repository.list_expenses(user_id)
    return [month.to_dict() for month in aggregator.monthly_summary(expenses, year or _current_year())]


@router.get("/day/{selected_date}")
def get_day(selected_date: str, user_id: str = Depends(get_current_user_id)) -> List[Dict]:
    return aggregator.expenses_for_date(repository.list_expenses(user_id), selected_date)


@router.get("/week/{year}/{week}")
def get_week(
    year: int,
    week: int = Path(..., ge=1, le=53),
    user_id: str = Depends(get_current_user_id),
) -> List[Dict]:
    grouped = aggregator.expenses_for_week(repository.list_expenses(user_id), year, week)
    return [
        {"date": day, "total": sum(float(e.get("amount", 0)) for e in items), "expenses": items}
        for day, items in grouped
    ]


@router.get("/month/{year}/{month_index}")
def get_month(
    year: int,
    month_index: int = Path(..., ge=0, le=11),
    user_id: str = Depends(get_current_user_id),
) -> List[Dict]:
    grouped = aggregator.expenses_for_month(repository.list_expenses(user_id), year, month_index)
    return [
        {"weekNum": week, "total": sum(float(e.get("amount", 0)) for e in items), "expenses": items}
        for week, items in grouped
    ]
