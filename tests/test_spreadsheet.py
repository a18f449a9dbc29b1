"""Tests for the .xlsx rendering of a registry record."""

from __future__ import annotations

from datetime import datetime, timezone
from io import BytesIO

from openpyxl import load_workbook

from rabapi.export.spreadsheet import WORKBOOK_CREATOR, build_workbook, workbook_bytes
from rabapi.scraper.models import RegistryLink, RegistryRecord

_QUERIED_AT = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)


def _record() -> RegistryRecord:
    return RegistryRecord(
        fields={"Modelo": "Cessna 172", "Situação": "Normal"},
        links=[
            RegistryLink(text="Certidão", href="certidao.asp"),
            RegistryLink(text="Certidão", href="certidao.asp"),
        ],
    )


def test_field_sheet_layout():
    wb = build_workbook(_record(), "PPXDC", "https://rab.test/", _QUERIED_AT)
    ws = wb["Aeronave"]
    rows = list(ws.iter_rows(values_only=True))

    assert rows == [
        ("Campo", "Valor"),
        ("Modelo", "Cessna 172"),
        ("Situação", "Normal"),
        (None, None),
        ("Matrícula consultada", "PPXDC"),
        ("Fonte", "https://rab.test/"),
        ("Consultado em (UTC)", "2024-05-01T12:30:00+00:00"),
    ]
    assert ws["A1"].font.bold and ws["B1"].font.bold
    assert ws.column_dimensions["A"].width == 35
    assert ws.column_dimensions["B"].width == 70


def test_links_sheet_keeps_duplicates():
    wb = build_workbook(_record(), "PPXDC", "https://rab.test/", _QUERIED_AT)
    ws = wb["Links"]

    assert ws.max_row == 3
    assert ws["A1"].value == "Texto" and ws["B1"].value == "URL"
    assert ws["A1"].font.bold
    assert ws.column_dimensions["B"].width == 90


def test_empty_record_still_has_both_sheets():
    wb = build_workbook(RegistryRecord(), "PPXDC", "https://rab.test/", _QUERIED_AT)
    assert wb.sheetnames == ["Aeronave", "Links"]
    assert wb["Links"].max_row == 1


def test_bytes_round_trip_keeps_creator():
    wb = build_workbook(_record(), "PPXDC", "https://rab.test/", _QUERIED_AT)
    loaded = load_workbook(BytesIO(workbook_bytes(wb)))

    assert loaded.properties.creator == WORKBOOK_CREATOR
    assert loaded["Aeronave"]["B2"].value == "Cessna 172"


def test_control_characters_are_dropped():
    record = RegistryRecord(
        fields={"Mode\x01lo": "Cessna\x08 172\x1b"},
        links=[RegistryLink(text="Certid\x02ão", href="certidao\x0e.asp")],
    )
    wb = build_workbook(record, "PP\x03XDC", "https://rab.test/", _QUERIED_AT)
    loaded = load_workbook(BytesIO(workbook_bytes(wb)))

    assert loaded["Aeronave"]["A2"].value == "Modelo"
    assert loaded["Aeronave"]["B2"].value == "Cessna 172"
    assert loaded["Aeronave"]["B4"].value == "PPXDC"
    assert loaded["Links"]["A2"].value == "Certidão"
    assert loaded["Links"]["B2"].value == "certidao.asp"
