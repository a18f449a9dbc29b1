"""Consulta RAB CLI — look up tail numbers without running the server.

Usage:
    python cli/main.py --help

Commands:
    lookup   → print the scraped registry record
    export   → write the record to an .xlsx file
    serve    → run the HTTP API with uvicorn
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from rabapi.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import asyncio
import json
from datetime import datetime, timezone
from typing import Optional

import typer

from rabapi.cache import PageCache
from rabapi.config import settings
from rabapi.log import configure_logging
from rabapi.scraper.fetcher import build_client
from rabapi.scraper import (
    RegistryFetcher,
    RegistryRecord,
    UpstreamError,
    normalize_marca,
    parse_registry_html,
)

app = typer.Typer(
    name="rab",
    help="Consulta RAB (ANAC) CLI.",
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _fetch_record(marca: str) -> RegistryRecord:
    async with build_client(settings) as client:
        fetcher = RegistryFetcher(
            client,
            PageCache(max_entries=1, ttl=settings.cache_ttl),
            url=settings.rab_url,
        )
        html = await fetcher.fetch(marca)
    return parse_registry_html(html)


def _resolve(marca: str, tag: str) -> tuple[str, RegistryRecord]:
    """Normalise *marca*, fetch it, and exit(1) on any lookup failure."""
    marca = normalize_marca(marca)
    if not marca:
        typer.echo(f"[{tag}] ❌ Informe uma matrícula (ex.: PPXXX).")
        raise typer.Exit(code=1)

    typer.echo(f"[{tag}] Consultando {marca} …", err=True)
    try:
        record = asyncio.run(_fetch_record(marca))
    except UpstreamError as exc:
        typer.echo(f"[{tag}] ❌ Falha consultando a ANAC: {exc}")
        raise typer.Exit(code=1)

    if record.is_not_found():
        typer.echo(f"[{tag}] ❌ Matrícula não encontrada: {marca}")
        raise typer.Exit(code=1)
    return marca, record


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, "--log-level", help="Logging level."),
) -> None:
    configure_logging(log_level)


@app.command("lookup")
def lookup(
    marca: str = typer.Argument(..., help="Tail number, e.g. PP-XDC."),
    as_json: bool = typer.Option(False, "--json", help="Print the API's JSON body."),
) -> None:
    """Look up a tail number and print the registry fields."""
    marca, record = _resolve(marca, "lookup")

    if as_json:
        body = {
            "marca": marca,
            "fonte": settings.rab_url,
            "consultado_em": datetime.now(timezone.utc).isoformat(),
            **record.to_dict(),
        }
        typer.echo(json.dumps(body, ensure_ascii=False, indent=2))
        return

    if not record.fields:
        typer.echo(f"[lookup] Nenhum campo extraído para {marca}.")
        return
    width = max(len(k) for k in record.fields)
    for campo, valor in record.fields.items():
        typer.echo(f"  {campo.ljust(width)}  {valor}")


@app.command("export")
def export(
    marca: str = typer.Argument(..., help="Tail number, e.g. PP-XDC."),
    out: Optional[Path] = typer.Option(
        None, "--out", "-o", help="Output path (defaults to aeronave_<MARCA>.xlsx)."
    ),
) -> None:
    """Look up a tail number and save the record as an Excel workbook."""
    from rabapi.export import build_workbook, export_filename

    marca, record = _resolve(marca, "export")
    path = out or Path(export_filename(marca))
    wb = build_workbook(record, marca, settings.rab_url, datetime.now(timezone.utc))
    wb.save(path)
    typer.echo(
        f"[export] ✅ {len(record.fields)} campos, {len(record.links)} links → {path}"
    )


@app.command("serve")
def serve(
    host: str = typer.Option(settings.host, help="Bind address."),
    port: int = typer.Option(settings.port, help="Listening port."),
    reload: bool = typer.Option(False, help="Reload on code changes."),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    typer.echo(f"[serve] ✅ Rodando em http://localhost:{port}")
    uvicorn.run("rabapi.api.app:app", host=host, port=port, reload=reload)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
