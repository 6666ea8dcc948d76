"""Unit tests for CSV and spreadsheet export helpers."""

import csv
import io
from datetime import date, datetime

from openpyxl import load_workbook

from src.oilpress_admin.core.exporting import (
    export_filename,
    flatten,
    join_visitors_with_orders,
    order_columns,
    parse_order_data,
    to_csv,
    to_xlsx,
)


class TestFlatten:
    def test_nested_dicts_use_dotted_keys(self):
        assert flatten({"order": {"address": {"city": "Pune"}}}) == {
            "order.address.city": "Pune"
        }

    def test_lists_are_indexed(self):
        assert flatten({"items": ["a", "b"]}) == {"items.0": "a", "items.1": "b"}

    def test_long_lists_are_truncated_with_marker(self):
        flat = flatten({"items": list(range(8))})
        assert [k for k in flat if k.startswith("items.") and k[6:].isdigit()] == [
            f"items.{i}" for i in range(5)
        ]
        assert flat["items.more"] == "+3 more"

    def test_none_becomes_empty_string(self):
        assert flatten({"phone": None}) == {"phone": ""}

    def test_datetimes_are_iso_formatted(self):
        when = datetime(2024, 5, 1, 10, 30)
        assert flatten({"created_at": when}) == {"created_at": "2024-05-01T10:30:00"}


class TestOrderData:
    def test_json_string_is_parsed(self):
        record = parse_order_data({"order_data": '{"total": 450}'})
        assert record["order_data"] == {"total": 450}

    def test_invalid_json_is_kept(self):
        record = parse_order_data({"order_data": "not json"})
        assert record["order_data"] == "not json"


class TestCsv:
    def test_preferred_columns_first_then_alphabetical(self):
        rows = [{"zeta": 1, "user_email": "a@b.c", "alpha": 2, "user_id": "u1", "order_id": "o1"}]
        assert order_columns(rows) == ["user_id", "user_email", "order_id", "alpha", "zeta"]

    def test_every_cell_is_quoted(self):
        output = to_csv([{"name": "Asha", "count": 3}])
        lines = output.strip().split("\n")
        assert lines[0] == '"count","name"'
        assert lines[1] == '"3","Asha"'

    def test_missing_values_are_blank(self):
        output = to_csv([{"a": 1}, {"b": 2}])
        rows = list(csv.DictReader(io.StringIO(output)))
        assert rows == [{"a": "1", "b": ""}, {"a": "", "b": "2"}]

    def test_order_data_is_flattened(self):
        output = to_csv([{"order_data": '{"items": [{"name": "Oil"}]}'}])
        rows = list(csv.DictReader(io.StringIO(output)))
        assert rows[0]["order_data.items.0.name"] == "Oil"

    def test_filename_has_date(self):
        assert export_filename("users_orders", date(2024, 3, 9)) == "users_orders_2024-03-09.csv"

    def test_filename_extension(self):
        assert export_filename("reviews", date(2024, 3, 9), "xlsx") == "reviews_2024-03-09.xlsx"


class TestXlsx:
    def test_workbook_matches_csv_columns(self):
        records = [
            {"user_id": "u1", "zeta": 1, "order_data": '{"items": [{"name": "Oil"}]}'},
            {"user_id": "u2", "alpha": "x"},
        ]
        sheet = load_workbook(io.BytesIO(to_xlsx(records, "UsersAndOrders")))["UsersAndOrders"]
        values = [
            [None if cell == "" else cell for cell in row]
            for row in sheet.iter_rows(values_only=True)
        ]

        assert values[0] == ["user_id", "alpha", "order_data.items.0.name", "zeta"]
        assert values[1] == ["u1", None, "Oil", 1]
        assert values[2] == ["u2", "x", None, None]

    def test_long_sheet_names_are_truncated(self):
        workbook = load_workbook(io.BytesIO(to_xlsx([{"a": 1}], "x" * 40)))
        assert workbook.sheetnames == ["x" * 31]


class TestJoinVisitors:
    def test_one_row_per_order(self):
        users = [{"id": "u1", "name": "Asha", "email": "asha@example.com", "phone": "99"}]
        orders = [
            {"id": "o1", "user_id": "u1", "amount": 450, "delivered": True},
            {"id": "o2", "userId": "u1", "amount": 120, "coupon": "NEW10"},
        ]
        rows = join_visitors_with_orders(users, orders)
        assert [r["order_id"] for r in rows] == ["o1", "o2"]
        assert rows[0]["user_name"] == "Asha"
        assert rows[0]["order_amount"] == 450
        assert rows[1]["coupon"] == "NEW10"

    def test_user_without_orders_gets_single_row(self):
        rows = join_visitors_with_orders([{"id": "u2", "name": "Ravi"}], [])
        assert rows == [
            {"user_id": "u2", "user_name": "Ravi", "user_email": None, "user_phone": None}
        ]
