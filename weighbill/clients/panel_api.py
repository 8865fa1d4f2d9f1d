"""
Panel API client
----------------

Thin wrapper over the remote billing/inventory REST service:

    /users/login, /users/profile
    /bills, /bills/{id}
    /products, /products/{id}, /products/{id}/stock
    /dashboard, /low-stock

Every call is a blocking request/response. Non-2xx responses and transport
failures raise PanelApiError carrying the remote `msg` / `error` text.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from weighbill.core.config import settings
from weighbill.core.errors import PanelApiError
from weighbill.schemas.billing import CreateBillRequest, RemoteBill, UpdateBillRequest
from weighbill.schemas.dashboard import DashboardOut
from weighbill.schemas.inventory import Product, ProductIn, StockPatchRequest

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def _error_message(resp: requests.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return "Request failed"
    if isinstance(data, dict):
        return str(data.get("msg") or data.get("error") or "Request failed")
    return "Request failed"


def _as_list(data: Any, key: str) -> List[Any]:
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and isinstance(data.get(key), list):
        return data[key]
    return []


def _parse(model: Type[M], data: Any) -> M:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.error("Unparseable %s from server: %s", model.__name__, e)
        raise PanelApiError(f"Invalid {model.__name__} from server") from e


def _parse_rows(model: Type[M], rows: List[Any]) -> List[M]:
    """Rows that fail validation are skipped and logged."""
    out = []
    for row in rows:
        try:
            out.append(model.model_validate(row))
        except ValidationError as e:
            logger.warning("Skipping unparseable %s row: %s", model.__name__, e)
    return out


class PanelApiClient:

    def __init__(
        self,
        token: Optional[str] = None,
        *,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or settings.PANEL_API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.PANEL_API_TIMEOUT
        self.token = token
        self.session = session or requests.Session()

    # -------------------------
    # Transport
    # -------------------------
    def _headers(self, auth: bool = True) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if auth and self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _request(self, method: str, path: str, *, json: Any = None,
                 auth: bool = True) -> Any:
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            resp = self.session.request(method,
                                        url,
                                        json=json,
                                        headers=self._headers(auth),
                                        timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise PanelApiError(f"Network error: {e}") from e

        if not resp.ok:
            msg = _error_message(resp)
            logger.error("%s %s returned %s: %s", method, url,
                         resp.status_code, msg)
            raise PanelApiError(msg, status_code=resp.status_code)

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise PanelApiError("Invalid JSON from server",
                                status_code=resp.status_code) from e

    # -------------------------
    # Auth
    # -------------------------
    def login(self, email: str, password: str) -> Dict[str, Any]:
        data = self._request("POST",
                             "/users/login",
                             json={
                                 "email": email,
                                 "password": password
                             },
                             auth=False)
        token = (data or {}).get("token")
        if token:
            self.token = token
        return data or {}

    def get_profile(self) -> Dict[str, Any]:
        return self._request("GET", "/users/profile") or {}

    # -------------------------
    # Bills
    # -------------------------
    def list_bills(self) -> List[RemoteBill]:
        data = self._request("GET", "/bills")
        return _parse_rows(RemoteBill, _as_list(data, "bills"))

    def get_bill(self, bill_id: str) -> RemoteBill:
        return _parse(RemoteBill, self._request("GET", f"/bills/{bill_id}"))

    def create_bill(self, req: CreateBillRequest) -> RemoteBill:
        data = self._request("POST",
                             "/bills",
                             json=req.model_dump(mode="json", by_alias=True))
        if isinstance(data, dict) and isinstance(data.get("bill"), dict):
            data = data["bill"]
        return _parse(RemoteBill, data)

    def update_bill(self, bill_id: str, req: UpdateBillRequest) -> RemoteBill:
        data = self._request("PUT",
                             f"/bills/{bill_id}",
                             json=req.model_dump(mode="json",
                                                 by_alias=True,
                                                 exclude_none=True))
        if isinstance(data, dict) and isinstance(data.get("bill"), dict):
            data = data["bill"]
        return _parse(RemoteBill, data)

    def delete_bill(self, bill_id: str) -> None:
        self._request("DELETE", f"/bills/{bill_id}")

    # -------------------------
    # Products / stock
    # -------------------------
    def list_products(self) -> List[Product]:
        data = self._request("GET", "/products")
        return _parse_rows(Product, _as_list(data, "products"))

    def get_product(self, product_id: str) -> Product:
        return _parse(Product, self._request("GET", f"/products/{product_id}"))

    def create_product(self, req: ProductIn) -> Product:
        data = self._request("POST",
                             "/products",
                             json=req.model_dump(mode="json", by_alias=True))
        return _parse(Product, data)

    def update_product(self, product_id: str, req: ProductIn) -> Product:
        data = self._request("PUT",
                             f"/products/{product_id}",
                             json=req.model_dump(mode="json", by_alias=True))
        return _parse(Product, data)

    def delete_product(self, product_id: str) -> None:
        self._request("DELETE", f"/products/{product_id}")

    def patch_stock(self, product_id: str, req: StockPatchRequest) -> Any:
        return self._request("PATCH",
                             f"/products/{product_id}/stock",
                             json=req.model_dump(mode="json", by_alias=True))

    # -------------------------
    # Dashboard
    # -------------------------
    def get_dashboard(self) -> DashboardOut:
        return _parse(DashboardOut, self._request("GET", "/dashboard") or {})

    def get_low_stock(self) -> List[Product]:
        data = self._request("GET", "/low-stock")
        return _parse_rows(Product, _as_list(data, "products"))
