"""Flatten stored documents into CSV or spreadsheet rows for download."""

from __future__ import annotations

import csv
import io
import json
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any

import pandas as pd

MAX_ARRAY_ITEMS = 5

PREFERRED_COLUMNS = [
    "user_id",
    "user_name",
    "user_email",
    "user_phone",
    "order_id",
    "order_created_at",
    "order_amount",
    "delivered",
    "payment_method",
    "payment_status",
]

_ORDER_KEYS = frozenset(
    ["id", "user_id", "userId", "created_at", "amount", "delivered", "payment_method", "payment_status"]
)


def _scalar(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def flatten(value: Any, prefix: str = "", out: dict[str, Any] | None = None) -> dict[str, Any]:
    """Flatten nested dicts and lists into ``dotted.key`` columns.

    Lists keep their first five items; the remainder is summarised in a
    ``<prefix>.more`` column.
    """
    if out is None:
        out = {}

    if isinstance(value, Mapping):
        for key, item in value.items():
            flatten(item, f"{prefix}.{key}" if prefix else str(key), out)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value[:MAX_ARRAY_ITEMS]):
            flatten(item, f"{prefix}.{index}" if prefix else str(index), out)
        if len(value) > MAX_ARRAY_ITEMS:
            out[f"{prefix}.more"] = f"+{len(value) - MAX_ARRAY_ITEMS} more"
    else:
        out[prefix] = _scalar(value)
    return out


def parse_order_data(record: dict[str, Any]) -> dict[str, Any]:
    """Decode a JSON string stored under ``order_data``; leave it alone otherwise."""
    raw = record.get("order_data")
    if isinstance(raw, str):
        try:
            record = {**record, "order_data": json.loads(raw)}
        except json.JSONDecodeError:
            pass
    return record


def order_columns(rows: Iterable[Mapping[str, Any]]) -> list[str]:
    seen: set[str] = set()
    for row in rows:
        seen.update(row.keys())
    preferred = [c for c in PREFERRED_COLUMNS if c in seen]
    rest = sorted(seen.difference(PREFERRED_COLUMNS))
    return preferred + rest


def _flat_rows(records: Iterable[Mapping[str, Any]]) -> tuple[list[dict[str, Any]], list[str]]:
    rows = [flatten(parse_order_data(dict(r))) for r in records]
    return rows, order_columns(rows)


def to_csv(records: Iterable[Mapping[str, Any]]) -> str:
    """Render ``records`` as CSV with every cell quoted."""
    rows, columns = _flat_rows(records)

    buffer = io.StringIO()
    writer = csv.DictWriter(
        buffer, fieldnames=columns, quoting=csv.QUOTE_ALL, restval="", lineterminator="\n"
    )
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue()


def to_xlsx(records: Iterable[Mapping[str, Any]], sheet_name: str = "Export") -> bytes:
    """Render ``records`` as a single-sheet workbook, columns ordered as in CSV."""
    rows, columns = _flat_rows(records)

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        pd.DataFrame(rows, columns=columns).to_excel(writer, index=False, sheet_name=sheet_name[:31])
    return output.getvalue()


def export_filename(name: str, today: date | None = None, extension: str = "csv") -> str:
    today = today or date.today()
    return f"{name}_{today.isoformat()}.{extension}"


def join_visitors_with_orders(
    users: Iterable[Mapping[str, Any]], orders: Iterable[Mapping[str, Any]]
) -> list[dict[str, Any]]:
    """One row per order, prefixed with its user's details.

    Users without orders still get a single row with blank order columns.
    """
    orders_by_user: dict[str, list[Mapping[str, Any]]] = {}
    for order in orders:
        user_id = order.get("user_id") or order.get("userId")
        if user_id:
            orders_by_user.setdefault(str(user_id), []).append(order)

    rows: list[dict[str, Any]] = []
    for user in users:
        user_id = str(user.get("id", ""))
        base = {
            "user_id": user_id,
            "user_name": user.get("name"),
            "user_email": user.get("email"),
            "user_phone": user.get("phone"),
        }
        user_orders = orders_by_user.get(user_id, [])
        if not user_orders:
            rows.append(base)
            continue
        for order in user_orders:
            rest = {k: v for k, v in order.items() if k not in _ORDER_KEYS}
            rows.append(
                {
                    **base,
                    "order_id": order.get("id"),
                    "order_created_at": order.get("created_at"),
                    "order_amount": order.get("amount"),
                    "delivered": order.get("delivered"),
                    "payment_method": order.get("payment_method"),
                    "payment_status": order.get("payment_status"),
                    **rest,
                }
            )
    return rows
