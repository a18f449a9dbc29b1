"""Spreadsheet export package."""

from rabapi.export.spreadsheet import (
    XLSX_MEDIA_TYPE,
    build_workbook,
    export_filename,
    workbook_bytes,
)

__all__ = ["XLSX_MEDIA_TYPE", "build_workbook", "export_filename", "workbook_bytes"]
