from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

DATE_FORMAT = "%Y-%m-%d"

TIMEFRAMES = ("Daily", "Weekly", "Monthly", "All-Time")


def parse_expense_date(value: Any) -> Optional[date]:
    """
    Parse a stored ``YYYY-MM-DD`` string. Returns None for anything that is
    not a valid calendar date so the record simply drops out of every
    date-based window.
    """
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except (TypeError, ValueError):
        return None


def _utc_midnight(day: date) -> datetime:
    return datetime(day.year, day.month, day.day, tzinfo=timezone.utc)


def _as_utc(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


@dataclass
class CategoryBreakdownEntry:
    """Spend for a single category and its share of the reference total."""

    name: str
    value: float
    percentage: float

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value, "percentage": self.percentage}


@dataclass
class ExpenseSummary:
    daily_total: float = 0.0
    weekly_total: float = 0.0
    monthly_total: float = 0.0
    category_breakdown: List[CategoryBreakdownEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dailyTotal": self.daily_total,
            "weeklyTotal": self.weekly_total,
            "monthlyTotal": self.monthly_total,
            "categoryBreakdown": [entry.to_dict() for entry in self.category_breakdown],
        }


@dataclass
class _Windows:
    today: str
    seven_days_ago: datetime
    thirty_days_ago: datetime


class SummaryCalculator:
    """
    Reduces a flat list of expense records into rolling-window totals
    (today, trailing 7 days, trailing 30 days) and a category breakdown
    over the 30-day window.

    Windows are sliding instants relative to ``now`` (168h / 720h back),
    not midnight aligned. Expense dates are read as UTC midnight.
    """

    @staticmethod
    def _windows(now: Optional[datetime]) -> _Windows:
        current = _as_utc(now)
        return _Windows(
            today=current.date().strftime(DATE_FORMAT),
            seven_days_ago=current - timedelta(days=7),
            thirty_days_ago=current - timedelta(days=30),
        )

    def summarize(
        self,
        expenses: List[Dict[str, Any]],
        now: Optional[datetime] = None,
    ) -> ExpenseSummary:
        windows = self._windows(now)

        daily = 0.0
        weekly = 0.0
        monthly = 0.0
        category_map: Dict[str, float] = {}

        for exp in expenses:
            amount = float(exp.get("amount", 0))

            if exp.get("date") == windows.today:
                daily += amount

            parsed = parse_expense_date(exp.get("date"))
            if parsed is None:
                continue
            instant = _utc_midnight(parsed)

            if instant >= windows.seven_days_ago:
                weekly += amount

            if instant >= windows.thirty_days_ago:
                monthly += amount
                category = exp.get("category")
                category_map[category] = category_map.get(category, 0.0) + amount

        # Floor of 1 keeps the division defined when nothing fell in the window.
        denominator = max(monthly, 1)
        breakdown = [
            CategoryBreakdownEntry(name=name, value=value, percentage=value / denominator * 100)
            for name, value in category_map.items()
        ]
        breakdown.sort(key=lambda entry: entry.value, reverse=True)

        return ExpenseSummary(
            daily_total=daily,
            weekly_total=weekly,
            monthly_total=monthly,
            category_breakdown=breakdown,
        )

    def filter_by_timeframe(
        self,
        expenses: List[Dict[str, Any]],
        timeframe: str,
        now: Optional[datetime] = None,
    ) -> List[Dict[str, Any]]:
        """
        Keep the expenses that fall in one of the dashboard timeframes
        (``Daily``, ``Weekly``, ``Monthly`` or ``All-Time``), using the same
        boundaries as :meth:`summarize`. Unknown timeframes behave like
        ``All-Time``.
        """
        windows = self._windows(now)

        def in_frame(exp: Dict[str, Any]) -> bool:
            if timeframe == "Daily":
                return exp.get("date") == windows.today
            if timeframe in ("Weekly", "Monthly"):
                parsed = parse_expense_date(exp.get("date"))
                if parsed is None:
                    return False
                boundary = windows.seven_days_ago if timeframe == "Weekly" else windows.thirty_days_ago
                return _utc_midnight(parsed) >= boundary
            return True

        return [exp for exp in expenses if in_frame(exp)]

    @staticmethod
    def category_breakdown(expenses: List[Dict[str, Any]]) -> List[CategoryBreakdownEntry]:
        """
        Breakdown over an arbitrary subset. Unlike the summary breakdown the
        share is taken against the subset's own total and is 0 when that
        total is 0.
        """
        totals: Dict[str, float] = defaultdict(float)
        total = 0.0
        for exp in expenses:
            amount = float(exp.get("amount", 0))
            totals[exp.get("category")] += amount
            total += amount

        breakdown = [
            CategoryBreakdownEntry(
                name=name,
                value=value,
                percentage=(value / total * 100) if total > 0 else 0.0,
            )
            for name, value in totals.items()
        ]
        breakdown.sort(key=lambda entry: entry.value, reverse=True)
        return breakdown

    def category_transactions(
        self,
        expenses: List[Dict[str, Any]],
        category: str,
        timeframe: str,
        now: Optional[datetime] = None,
    ) -> List[Dict[str, Any]]:
        in_frame = self.filter_by_timeframe(expenses, timeframe, now)
        matches = [exp for exp in in_frame if exp.get("category") == category]
        return sorted(matches, key=_date_sort_key, reverse=True)

    @staticmethod
    def sort_for_history(expenses: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Newest first by expense date, then by insertion time."""
        return sorted(
            expenses,
            key=lambda exp: (_date_sort_key(exp), int(exp.get("createdAt", 0) or 0)),
            reverse=True,
        )


def _date_sort_key(exp: Dict[str, Any]) -> date:
    return parse_expense_date(exp.get("date")) or date.min
