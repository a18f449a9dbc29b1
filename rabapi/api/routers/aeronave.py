"""Registry lookup endpoints.

Routes
------
GET /api/aeronave?marca=<tail>        Scraped registry record as JSON
GET /api/aeronave.xlsx?marca=<tail>   Same record as an Excel download

Both answer 400 for an empty marca (before touching the network), 404 when
the registry reports no aircraft and no field was scraped, and 502 when the
registry could not be queried or its page could not be processed.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from rabapi.export.spreadsheet import (
    XLSX_MEDIA_TYPE,
    build_workbook,
    export_filename,
    workbook_bytes,
)
from rabapi.scraper.fetcher import RegistryFetcher
from rabapi.scraper.models import RegistryRecord
from rabapi.scraper.normalize import normalize_marca
from rabapi.scraper.parser import parse_registry_html

logger = logging.getLogger(__name__)

router = APIRouter()

MISSING_MARCA_MESSAGE = "Informe ?marca=PPXXX"
NOT_FOUND_MESSAGE = "Matrícula não encontrada"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _lookup(request: Request, marca: str) -> RegistryRecord:
    fetcher: RegistryFetcher = request.app.state.fetcher
    html = await fetcher.fetch(marca)
    return parse_registry_html(html)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _error_message(exc: Exception) -> str:
    return str(exc) or exc.__class__.__name__


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("/aeronave")
async def get_aeronave(request: Request, marca: Optional[str] = None) -> Any:
    """Look up *marca* in the registry and return the scraped record."""
    marca = normalize_marca(marca)
    if not marca:
        return JSONResponse(status_code=400, content={"error": MISSING_MARCA_MESSAGE})

    fonte = request.app.state.settings.rab_url
    try:
        record = await _lookup(request, marca)
    except Exception as exc:
        logger.warning("lookup for %s failed: %s", marca, exc)
        return JSONResponse(
            status_code=502,
            content={
                "error": "Falha consultando a ANAC",
                "details": _error_message(exc),
            },
        )

    if record.is_not_found():
        return JSONResponse(
            status_code=404, content={"error": NOT_FOUND_MESSAGE, "marca": marca}
        )

    return {
        "marca": marca,
        "fonte": fonte,
        "consultado_em": _utcnow().isoformat(),
        **record.to_dict(),
    }


@router.get("/aeronave.xlsx")
async def get_aeronave_xlsx(request: Request, marca: Optional[str] = None) -> Response:
    """Look up *marca* and stream the record back as an ``.xlsx`` workbook."""
    marca = normalize_marca(marca)
    if not marca:
        return PlainTextResponse(MISSING_MARCA_MESSAGE, status_code=400)

    fonte = request.app.state.settings.rab_url
    try:
        record = await _lookup(request, marca)
        if record.is_not_found():
            return PlainTextResponse(NOT_FOUND_MESSAGE, status_code=404)
        wb = build_workbook(record, marca, fonte, _utcnow())
        content = workbook_bytes(wb)
    except Exception as exc:
        logger.warning("spreadsheet for %s failed: %s", marca, exc)
        return PlainTextResponse(
            f"Falha gerando Excel: {_error_message(exc)}", status_code=502
        )

    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={
            "Content-Disposition": f'attachment; filename="{export_filename(marca)}"'
        },
    )
