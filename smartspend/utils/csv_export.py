import csv
import io
import re
from datetime import datetime
from typing import Any, Dict, List, Optional

from smartspend.utils.analyzer import parse_expense_date

CSV_HEADERS = ["Date", "Item", "Category", "Amount (INR)"]

_FORMULA_PREFIX = re.compile(r"^[=+\-@]")


def sanitize_for_csv(value: Any) -> str:
    """Neutralise spreadsheet formulas by prefixing them with a quote."""
    if not value:
        return ""
    text = str(value)
    if _FORMULA_PREFIX.match(text):
        return f"'{text}"
    return text


def export_filename(today: Optional[datetime] = None) -> str:
    stamp = (today or datetime.utcnow()).strftime("%Y-%m-%d")
    return f"expenses_export_{stamp}.csv"


def generate_csv(expenses: List[Dict[str, Any]]) -> str:
    """Render expenses newest first. Returns an empty string for no expenses."""
    if not expenses:
        return ""

    ordered = sorted(
        expenses,
        key=lambda e: parse_expense_date(e.get("date")) or datetime.min.date(),
        reverse=True,
    )

    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for e in ordered:
        writer.writerow([
            sanitize_for_csv(e.get("date")),
            sanitize_for_csv(e.get("item")),
            sanitize_for_csv(e.get("category")),
            f"{float(e.get('amount', 0)):.2f}",
        ])
    return output.getvalue()
