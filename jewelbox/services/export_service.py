"""
CSV export of sales and expenses
"""
import csv
import io
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, List, Sequence

from jewelbox.models import Expense, Sale
from jewelbox.utils.numbers import round_money

SALES_HEADERS = [
    "Invoice Number",
    "Date",
    "Customer Name",
    "Customer Phone",
    "Items Sold",
    "Total Amount",
    "Notes",
]

EXPENSE_HEADERS = [
    "Date",
    "Description",
    "Category",
    "Amount",
]


def _fmt_date(value) -> str:
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return ""


def _flatten_notes(notes) -> str:
    """Notes go in one cell on one line: commas -> ';', newlines -> ' '."""
    if not notes:
        return ""
    return notes.replace(",", ";").replace("\r\n", " ").replace("\n", " ")


def _to_csv(headers: Sequence[str], rows: Iterable[Sequence]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(headers)
    writer.writerows(rows)
    return buf.getvalue()


def sales_csv(sales: Iterable[Sale]) -> str:
    rows: List[list] = []
    for sale in sales:
        rows.append([
            sale.invoice_number or "",
            _fmt_date(sale.created_at),
            sale.customer_name or "",
            sale.customer_phone or "",
            len(sale.line_items),
            f"{round_money(Decimal(str(sale.total_amount or 0)))}",
            _flatten_notes(sale.notes),
        ])
    return _to_csv(SALES_HEADERS, rows)


def expenses_csv(expenses: Iterable[Expense]) -> str:
    rows = [
        [
            _fmt_date(e.expense_date),
            e.description or "",
            e.category.name if e.category else "Uncategorized",
            f"{round_money(Decimal(str(e.amount or 0)))}",
        ]
        for e in expenses
    ]
    return _to_csv(EXPENSE_HEADERS, rows)


def export_filename(kind: str, on: date = None) -> str:
    """sales_export_2026-10-19.csv"""
    return f"{kind}_export_{(on or date.today()).isoformat()}.csv"
