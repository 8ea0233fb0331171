"""
Calendar aggregation: re-buckets expenses by day, ISO week and month for a
reference year and provides the drill-down groupings used by the calendar
screen.
"""
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Tuple

from smartspend.utils.analyzer import DATE_FORMAT, parse_expense_date

VIEW_MODES = ("daily", "weekly", "monthly")


def iso_week_number(day: date) -> int:
    """
    ISO-8601 week number: move to the Thursday of the day's own week, then
    count weeks from January 1st of that Thursday's year.
    """
    thursday = day + timedelta(days=4 - day.isoweekday())
    year_start = date(thursday.year, 1, 1)
    # ceil(((delta_days) + 1) / 7) for a whole number of days
    return (thursday - year_start).days // 7 + 1


@dataclass
class WeekSummary:
    week_num: int
    start: date
    end: date
    total: float
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "weekNum": self.week_num,
            "start": self.start.strftime(DATE_FORMAT),
            "end": self.end.strftime(DATE_FORMAT),
            "total": self.total,
            "count": self.count,
        }


@dataclass
class MonthSummary:
    index: int
    name: str
    total: float = 0.0
    count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"index": self.index, "name": self.name, "total": self.total, "count": self.count}


class CalendarAggregator:
    """Pure bucketing helpers; no state besides the inputs of each call."""

    @staticmethod
    def _in_year(expenses: List[Dict[str, Any]], year: int) -> List[Tuple[Dict[str, Any], date]]:
        scoped = []
        for exp in expenses:
            parsed = parse_expense_date(exp.get("date"))
            if parsed is not None and parsed.year == year:
                scoped.append((exp, parsed))
        return scoped

    def daily_totals(self, expenses: List[Dict[str, Any]]) -> Dict[str, float]:
        """Summed amount per date string across the whole collection."""
        totals: Dict[str, float] = {}
        for exp in expenses:
            key = exp.get("date")
            totals[key] = totals.get(key, 0.0) + float(exp.get("amount", 0))
        return totals

    def weekly_summary(self, expenses: List[Dict[str, Any]], year: int) -> List[WeekSummary]:
        """
        One row per ISO week of ``year`` that has spend, most recent week
        first. ``start``/``end`` are the simplified ``Jan 1 + 7 * (n - 1)``
        anchors used for labels, not true ISO week boundaries.
        """
        week_totals: Dict[int, float] = {}
        week_counts: Dict[int, int] = {}
        for exp, parsed in self._in_year(expenses, year):
            week = iso_week_number(parsed)
            week_totals[week] = week_totals.get(week, 0.0) + float(exp.get("amount", 0))
            week_counts[week] = week_counts.get(week, 0) + 1

        jan_first = date(year, 1, 1)
        weeks = []
        for week_num in range(1, 54):
            if week_totals.get(week_num, 0) > 0:
                start = jan_first + timedelta(days=(week_num - 1) * 7)
                weeks.append(
                    WeekSummary(
                        week_num=week_num,
                        start=start,
                        end=start + timedelta(days=6),
                        total=week_totals[week_num],
                        count=week_counts[week_num],
                    )
                )
        weeks.sort(key=lambda week: week.week_num, reverse=True)
        return weeks

    def monthly_summary(self, expenses: List[Dict[str, Any]], year: int) -> List[MonthSummary]:
        months = [MonthSummary(index=i, name=calendar.month_name[i + 1]) for i in range(12)]
        for exp, parsed in self._in_year(expenses, year):
            month = months[parsed.month - 1]
            month.total += float(exp.get("amount", 0))
            month.count += 1
        return months

    def expenses_for_date(
        self,
        expenses: List[Dict[str, Any]],
        selected_date: Optional[str],
    ) -> List[Dict[str, Any]]:
        if not selected_date:
            return []
        return [exp for exp in expenses if exp.get("date") == selected_date]

    def expenses_for_week(
        self,
        expenses: List[Dict[str, Any]],
        year: int,
        week: Optional[int],
    ) -> Optional[List[Tuple[str, List[Dict[str, Any]]]]]:
        """Expenses of one ISO week grouped by day, earliest day first."""
        if not week:
            return None

        grouped: Dict[str, List[Dict[str, Any]]] = {}
        days: Dict[str, date] = {}
        for exp, parsed in self._in_year(expenses, year):
            if iso_week_number(parsed) == week:
                grouped.setdefault(exp["date"], []).append(exp)
                days[exp["date"]] = parsed
        return sorted(grouped.items(), key=lambda item: days[item[0]])

    def expenses_for_month(
        self,
        expenses: List[Dict[str, Any]],
        year: int,
        month_index: Optional[int],
    ) -> Optional[List[Tuple[int, List[Dict[str, Any]]]]]:
        """Expenses of one month grouped by ISO week number, ascending.

        Empty months are not rejected here; they yield an empty grouping.
        """
        if month_index is None:
            return None

        grouped: Dict[int, List[Dict[str, Any]]] = {}
        for exp, parsed in self._in_year(expenses, year):
            if parsed.month - 1 == month_index:
                grouped.setdefault(iso_week_number(parsed), []).append(exp)
        return sorted(grouped.items(), key=lambda item: item[0])


def _shift_months(day: date, months: int) -> date:
    total = day.year * 12 + (day.month - 1) + months
    year, month = divmod(total, 12)
    last_day = calendar.monthrange(year, month + 1)[1]
    return date(year, month + 1, min(day.day, last_day))


@dataclass
class CalendarState:
    """
    Navigation and selection state of the calendar screen.

    Changing the view mode or moving the cursor into another year clears the
    week and month selections. ``selected_date`` survives navigation.
    """

    cursor: date
    view_mode: str = "daily"
    selected_date: Optional[str] = None
    selected_week: Optional[int] = None
    selected_month_index: Optional[int] = None

    def _reset_selections(self) -> None:
        self.selected_week = None
        self.selected_month_index = None

    def set_view_mode(self, mode: str) -> None:
        if mode not in VIEW_MODES:
            raise ValueError(f"Unknown view mode: {mode}")
        if mode != self.view_mode:
            self.view_mode = mode
            self._reset_selections()

    def _move(self, step: int) -> None:
        previous_year = self.cursor.year
        if self.view_mode == "daily":
            self.cursor = _shift_months(self.cursor, step)
        else:
            self.cursor = _shift_months(self.cursor, 12 * step)
        if self.cursor.year != previous_year:
            self._reset_selections()

    def previous(self) -> None:
        self._move(-1)

    def next(self) -> None:
        self._move(1)

    def select_date(self, value: Optional[str]) -> None:
        self.selected_date = value

    def select_week(self, week: Optional[int]) -> None:
        self.selected_week = week

    def select_month(self, month_index: Optional[int]) -> None:
        if month_index is not None and not 0 <= month_index <= 11:
            raise ValueError(f"Month index out of range: {month_index}")
        self.selected_month_index = month_index

    @property
    def year(self) -> int:
        return self.cursor.year
