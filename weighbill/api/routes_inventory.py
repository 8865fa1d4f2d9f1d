# weighbill/api/routes_inventory.py
from __future__ import annotations

from io import BytesIO

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from weighbill.api.deps import get_api_client
from weighbill.clients.panel_api import PanelApiClient
from weighbill.core.errors import BillValidationError
from weighbill.schemas.inventory import ManualRestockIn
from weighbill.services.excel_export import build_low_stock_excel
from weighbill.services.inventory import kg_gm_to_grams, low_stock_rows, manual_restock, stock_rows
from weighbill.utils.resp import ok

router = APIRouter(prefix="/inventory", tags=["Inventory"])

XLSX_MEDIA = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("/low-stock")
def low_stock(client: PanelApiClient = Depends(get_api_client)):
    rows = low_stock_rows(client.list_products())
    return ok(rows, meta={"count": len(rows)})


@router.get("/low-stock/remote")
def low_stock_remote(client: PanelApiClient = Depends(get_api_client)):
    # classified by the panel, not by the local threshold
    rows = stock_rows(client.get_low_stock())
    return ok(rows, meta={"count": len(rows)})


@router.get("/low-stock/export")
def export_low_stock(client: PanelApiClient = Depends(get_api_client)):
    rows = low_stock_rows(client.list_products())
    buf = BytesIO()
    build_low_stock_excel(buf, rows)
    buf.seek(0)
    return StreamingResponse(
        buf,
        media_type=XLSX_MEDIA,
        headers={
            "Content-Disposition":
            'attachment; filename="Low_Stock_Products.xlsx"'
        },
    )


@router.post("/products/{product_id}/restock")
def restock(product_id: str,
            body: ManualRestockIn,
            client: PanelApiClient = Depends(get_api_client)):
    if kg_gm_to_grams(body.kg, body.gm) <= 0:
        raise BillValidationError("Restock quantity must be > 0", field="kg")
    report = manual_restock(client, product_id, body.kg, body.gm)
    return ok(report)
