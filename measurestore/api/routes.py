from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from ..core.errors import MeasureStoreError
from ..services.documents import MeasurementService
from .upload import read_upload

logger = logging.getLogger(__name__)

router = APIRouter()

# Every method reaches the handlers so unsupported ones get a 400, not a 405
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE", "CONNECT"]

STORE_USAGE = "You should POST your json file here\n"


# --- Dependency getter (main.py sets it via app.dependency_overrides) ---
def get_service() -> MeasurementService:  # overridden in main
    raise RuntimeError("Measurement service dependency not configured")


def _unsupported(method: str) -> PlainTextResponse:
    return PlainTextResponse(f"Unsupported method {method}", status_code=400)


def _unprocessable(exc: MeasureStoreError) -> PlainTextResponse:
    return PlainTextResponse(str(exc), status_code=422)


@router.api_route("/store", methods=ALL_METHODS, include_in_schema=False)
async def store_endpoint(request: Request, svc: MeasurementService = Depends(get_service)):
    method = request.method
    if method == "OPTIONS":
        return Response(status_code=200)
    if method == "GET":
        return PlainTextResponse(STORE_USAGE)
    if method == "POST":
        return await store_post(request, svc)
    return _unsupported(method)


async def store_post(request: Request, svc: MeasurementService) -> Response:
    try:
        raw = await read_upload(request)
        loop = asyncio.get_running_loop()
        message = await loop.run_in_executor(None, svc.save_document, raw)
    except MeasureStoreError as exc:
        logger.warning("Store request failed: %s", exc)
        return _unprocessable(exc)
    return HTMLResponse(message)


@router.api_route("/table", methods=ALL_METHODS, include_in_schema=False)
async def table_endpoint(request: Request, svc: MeasurementService = Depends(get_service)):
    method = request.method
    if method == "OPTIONS":
        return Response(status_code=200)
    if method == "GET":
        return await table_get(svc)
    return _unsupported(method)


async def table_get(svc: MeasurementService) -> Response:
    try:
        loop = asyncio.get_running_loop()
        html = await loop.run_in_executor(None, svc.render_table)
    except MeasureStoreError as exc:
        logger.warning("Table request failed: %s", exc)
        return _unprocessable(exc)
    return HTMLResponse(html)
