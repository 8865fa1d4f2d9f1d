# weighbill/api/exception_handlers.py
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from weighbill.core.errors import AttendanceError, BillValidationError, PanelApiError
from weighbill.utils.resp import err

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(BillValidationError)
    async def bill_validation_handler(request: Request,
                                      exc: BillValidationError) -> JSONResponse:
        return err(msg=exc.msg,
                   status_code=400,
                   code="VALIDATION",
                   details={"field": exc.field} if exc.field else None)

    @app.exception_handler(PanelApiError)
    async def panel_api_handler(request: Request,
                                exc: PanelApiError) -> JSONResponse:
        status = exc.status_code if exc.status_code and exc.status_code >= 400 else 502
        return err(msg=exc.msg, status_code=status, code="REMOTE")

    @app.exception_handler(AttendanceError)
    async def attendance_handler(request: Request,
                                 exc: AttendanceError) -> JSONResponse:
        return err(msg=exc.msg, status_code=409, code="ATTENDANCE")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request,
                                     exc: StarletteHTTPException) -> JSONResponse:
        # exc.detail can be str/dict/list
        msg = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return err(msg=msg, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
            request: Request, exc: RequestValidationError) -> JSONResponse:
        return err(msg="Validation error", status_code=422)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request,
                                          exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method,
                         request.url.path)
        return err(msg="Internal server error", status_code=500)
