"""Tests for tail-number normalisation and download filename sanitising."""

from __future__ import annotations

import re

import pytest

from rabapi.scraper.normalize import (
    MAX_FILENAME_LENGTH,
    collapse_whitespace,
    normalize_marca,
    safe_filename,
)
from rabapi.export.spreadsheet import export_filename


class TestNormalizeMarca:
    def test_example_from_query_string(self) -> None:
        assert normalize_marca("pp xdc") == "PPXDC"

    @pytest.mark.parametrize(
        "raw",
        ["  pr-abc ", "p\tp\nx d c", "Pt ABC", "já-xyz", "   "],
    )
    def test_no_whitespace_and_upper_case(self, raw: str) -> None:
        out = normalize_marca(raw)
        assert not re.search(r"\s", out)
        assert out == out.upper()

    def test_none_becomes_empty(self) -> None:
        assert normalize_marca(None) == ""

    def test_whitespace_only_becomes_empty(self) -> None:
        assert normalize_marca(" \t\n ") == ""

    def test_keeps_hyphen(self) -> None:
        assert normalize_marca("pp-xdc") == "PP-XDC"


class TestCollapseWhitespace:
    def test_collapses_runs(self) -> None:
        assert collapse_whitespace("  Cessna \n\t 172  ") == "Cessna 172"

    def test_none(self) -> None:
        assert collapse_whitespace(None) == ""


class TestSafeFilename:
    def test_allowed_characters_only(self) -> None:
        name = safe_filename('aeronave_PP/X"D C;ç')
        assert re.fullmatch(r"[A-Za-z0-9._-]+", name)
        assert name == "aeronave_PP_X_D_C__"

    def test_length_capped(self) -> None:
        assert len(safe_filename("x" * 500)) == MAX_FILENAME_LENGTH

    def test_empty_falls_back(self) -> None:
        assert safe_filename("") == "arquivo"
        assert safe_filename(None) == "arquivo"

    def test_export_filename(self) -> None:
        assert export_filename("PP-XDC") == "aeronave_PP-XDC.xlsx"

    def test_export_filename_sanitises_marca(self) -> None:
        assert export_filename("PP\"XDC") == "aeronave_PP_XDC.xlsx"
