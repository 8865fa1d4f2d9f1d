# weighbill/services/excel_export.py
from __future__ import annotations

from typing import Iterable

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from weighbill.schemas.dashboard import CustomerPendingOut
from weighbill.schemas.inventory import LowStockRow
from weighbill.services.billing_math import money2


def _money(x) -> float:
    return float(money2(x))


def _autosize(ws, ncols: int, width: int = 18) -> None:
    for col in range(1, ncols + 1):
        ws.column_dimensions[get_column_letter(col)].width = width


def build_low_stock_excel(fp, rows: Iterable[LowStockRow]):
    wb = Workbook()
    ws = wb.active
    ws.title = "LowStock"

    headers = ["Name", "Stock (KG)", "Stock (GM)", "Total (KG)"]
    ws.append(headers)

    for r in rows:
        ws.append([
            r.name,
            int(r.stock_kg),
            int(r.stock_gm),
            _money(r.total_kg),
        ])

    _autosize(ws, len(headers))
    wb.save(fp)


def build_customer_pending_excel(fp, customers: Iterable[CustomerPendingOut]):
    wb = Workbook()
    ws = wb.active
    ws.title = "Pending"

    headers = ["Customer", "Invoice No", "Date", "Total", "Paid", "Pending"]
    ws.append(headers)

    for c in customers:
        for b in c.bills:
            ws.append([
                c.name,
                b.invoice_no or "",
                b.date or "",
                _money(b.total),
                _money(b.paid),
                _money(b.pending),
            ])

    _autosize(ws, len(headers))
    wb.save(fp)
