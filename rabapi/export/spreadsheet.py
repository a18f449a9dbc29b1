"""Renders a :class:`RegistryRecord` as an ``.xlsx`` workbook.

Layout
------
``Aeronave``  Campo | Valor, one row per scraped field, then a blank row and
              the query metadata (marca, source URL, timestamp).
``Links``     Texto | URL, one row per anchor found on the page.
"""

from __future__ import annotations

from datetime import datetime
from io import BytesIO

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from rabapi.scraper.models import RegistryRecord
from rabapi.scraper.normalize import safe_filename

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
WORKBOOK_CREATOR = "Consulta RAB (ANAC)"


def _cell_text(value: str) -> str:
    """Drop control characters that the xlsx format cannot store."""
    return ILLEGAL_CHARACTERS_RE.sub("", value)


def _write_header(ws: Worksheet, columns: list[tuple[str, int]]) -> None:
    """Write a bold header row and set the column widths."""
    ws.append([title for title, _ in columns])
    for idx, (_, width) in enumerate(columns, start=1):
        ws.cell(row=1, column=idx).font = Font(bold=True)
        ws.column_dimensions[get_column_letter(idx)].width = width


def build_workbook(
    record: RegistryRecord,
    marca: str,
    source_url: str,
    queried_at: datetime,
) -> Workbook:
    wb = Workbook()
    wb.properties.creator = WORKBOOK_CREATOR
    wb.properties.created = queried_at.replace(tzinfo=None)

    ws = wb.active
    ws.title = "Aeronave"
    _write_header(ws, [("Campo", 35), ("Valor", 70)])
    for campo, valor in record.fields.items():
        ws.append([_cell_text(campo), _cell_text(valor)])

    ws.append([])
    ws.append(["Matrícula consultada", _cell_text(marca)])
    ws.append(["Fonte", source_url])
    ws.append(["Consultado em (UTC)", queried_at.isoformat()])

    ws2 = wb.create_sheet("Links")
    _write_header(ws2, [("Texto", 55), ("URL", 90)])
    for link in record.links:
        ws2.append([_cell_text(link.text), _cell_text(link.href)])

    return wb


def workbook_bytes(wb: Workbook) -> bytes:
    """Serialise *wb* to the bytes of an ``.xlsx`` file."""
    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


def export_filename(marca: str) -> str:
    """Download filename for *marca*, e.g. ``aeronave_PPXDC.xlsx``."""
    return f"{safe_filename(f'aeronave_{marca}')}.xlsx"
