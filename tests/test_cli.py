"""Tests for the `rab` CLI (lookup / export / serve)."""

from __future__ import annotations

import json
from unittest.mock import patch

import httpx
import pytest
import respx
from openpyxl import load_workbook
from typer.testing import CliRunner

from cli.main import app

runner = CliRunner()

RAB_URL = "https://rab.test/aeronaves/cons_rab_resposta.asp"

_FOUND_PAGE = (
    "<table><tr><td>Modelo:</td><td>Cessna 172</td></tr>"
    "<tr><td>Operador:</td><td>ESCOLA DE AVIAÇÃO</td></tr></table>"
    '<a href="/certidao">Certidão</a>'
).encode("latin-1")


@pytest.fixture(autouse=True)
def rab_url(monkeypatch):
    monkeypatch.setattr("cli.main.settings.rab_url", RAB_URL)


def test_lookup_prints_fields():
    with respx.mock:
        route = respx.get(RAB_URL).mock(
            return_value=httpx.Response(200, content=_FOUND_PAGE)
        )
        result = runner.invoke(app, ["lookup", "pp xdc"])

    assert result.exit_code == 0
    assert "Cessna 172" in result.stdout
    assert "ESCOLA DE AVIAÇÃO" in result.stdout
    assert route.calls.last.request.url.params["textMarca"] == "PPXDC"


def test_lookup_json():
    with respx.mock:
        respx.get(RAB_URL).mock(return_value=httpx.Response(200, content=_FOUND_PAGE))
        result = runner.invoke(app, ["lookup", "PPXDC", "--json"])

    assert result.exit_code == 0
    body = json.loads(result.stdout[result.stdout.index("{"):])
    assert body["marca"] == "PPXDC"
    assert body["fonte"] == RAB_URL
    assert body["fields"]["Modelo"] == "Cessna 172"
    assert body["links"] == [{"text": "Certidão", "href": "/certidao"}]


def test_lookup_empty_marca_fails_without_network():
    with respx.mock:
        route = respx.get(RAB_URL).mock(return_value=httpx.Response(200))
        result = runner.invoke(app, ["lookup", "  "])

    assert result.exit_code == 1
    assert "Informe" in result.stdout
    assert not route.called


def test_lookup_not_found():
    page = b"<body>Nenhuma aeronave encontrada</body>"
    with respx.mock:
        respx.get(RAB_URL).mock(return_value=httpx.Response(200, content=page))
        result = runner.invoke(app, ["lookup", "PPZZZ"])

    assert result.exit_code == 1
    assert "não encontrada" in result.stdout


def test_lookup_upstream_failure():
    with respx.mock:
        respx.get(RAB_URL).mock(return_value=httpx.Response(502))
        result = runner.invoke(app, ["lookup", "PPXDC"])

    assert result.exit_code == 1
    assert "Falha consultando a ANAC" in result.stdout


def test_export_writes_workbook(tmp_path):
    out = tmp_path / "pp.xlsx"
    with respx.mock:
        respx.get(RAB_URL).mock(return_value=httpx.Response(200, content=_FOUND_PAGE))
        result = runner.invoke(app, ["export", "PPXDC", "--out", str(out)])

    assert result.exit_code == 0
    assert out.exists()
    wb = load_workbook(out)
    assert wb["Aeronave"]["A2"].value == "Modelo"
    assert wb["Aeronave"]["B2"].value == "Cessna 172"
    assert wb["Links"]["B2"].value == "/certidao"


def test_serve_runs_uvicorn():
    with patch("uvicorn.run") as mock_run:
        result = runner.invoke(app, ["serve", "--host", "127.0.0.1", "--port", "8081"])

    assert result.exit_code == 0
    mock_run.assert_called_once_with(
        "rabapi.api.app:app", host="127.0.0.1", port=8081, reload=False
    )
