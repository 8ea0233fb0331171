import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from smartspend.db import repository
from smartspend.routers.auth import get_current_user_id
from smartspend.utils.csv_export import export_filename, generate_csv

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/csv")
def export_csv(user_id: str = Depends(get_current_user_id)):
    """Download every expense of the current user as CSV, newest first."""
    expenses = repository.list_expenses(user_id)
    if not expenses:
        raise HTTPException(status_code=404, detail="No expenses to export.")

    logger.info(f"Exporting {len(expenses)} expenses for user {user_id}")
    return Response(
        content=generate_csv(expenses),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export_filename()}"'},
    )
