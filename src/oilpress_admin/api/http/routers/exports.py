"""CSV and spreadsheet downloads of storefront records."""

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response
from loguru import logger
from sqlmodel import Session

from src.oilpress_admin.api.http.deps import get_db_session
from src.oilpress_admin.core.exporting import (
    export_filename,
    join_visitors_with_orders,
    to_csv,
    to_xlsx,
)
from src.oilpress_admin.entities import collections
from src.oilpress_admin.entities.core._base import DocumentRepository, Entity

router = APIRouter()

EXPORTABLE = {
    "bulk-orders": collections.BULK_ORDERS,
    "contact-messages": collections.CONTACT_MESSAGES,
    "reviews": collections.REVIEWS,
    "orders": collections.ORDERS,
}

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

ExportFormat = Literal["csv", "xlsx"]


def _raw(session: Session, collection: str) -> list[dict]:
    return DocumentRepository(session, collection, Entity).list_raw()


def export_response(
    records: list[dict], name: str, fmt: ExportFormat = "csv", sheet_name: str | None = None
) -> Response:
    if not records:
        raise HTTPException(status_code=404, detail="No data to export")
    filename = export_filename(name, extension=fmt)
    logger.info("Exporting {} rows to {}", len(records), filename)

    if fmt == "xlsx":
        content, media_type = to_xlsx(records, sheet_name or name), XLSX_MEDIA_TYPE
    else:
        content, media_type = to_csv(records), "text/csv"
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/visitors")
def export_visitors(
    fmt: ExportFormat = Query(default="csv", alias="format"),
    session: Session = Depends(get_db_session),
) -> Response:
    """Registered users joined with their orders."""
    rows = join_visitors_with_orders(
        _raw(session, collections.USERS), _raw(session, collections.ORDERS)
    )
    return export_response(rows, "users_orders", fmt, sheet_name="UsersAndOrders")


@router.get("/{name}")
def export_collection(
    name: str,
    fmt: ExportFormat = Query(default="csv", alias="format"),
    session: Session = Depends(get_db_session),
) -> Response:
    collection = EXPORTABLE.get(name)
    if collection is None:
        raise HTTPException(status_code=404, detail=f"Unknown export: {name}")
    return export_response(_raw(session, collection), name.replace("-", "_"), fmt)
