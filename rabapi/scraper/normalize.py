"""String helpers for tail numbers and download filenames."""

from __future__ import annotations

import re
from typing import Optional

_WHITESPACE = re.compile(r"\s+")
_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9._-]")

MAX_FILENAME_LENGTH = 120


def normalize_marca(marca: Optional[str]) -> str:
    """Return *marca* trimmed, upper-cased and with all whitespace removed.

    ``None`` normalises to the empty string.

    >>> normalize_marca(" pp xdc ")
    'PPXDC'
    """
    return _WHITESPACE.sub("", (marca or "").strip().upper())


def collapse_whitespace(text: Optional[str]) -> str:
    """Collapse runs of whitespace into single spaces and trim the ends."""
    return _WHITESPACE.sub(" ", text or "").strip()


def safe_filename(name: Optional[str]) -> str:
    """Replace anything outside ``[A-Za-z0-9._-]`` with ``_`` and cap the length."""
    return _UNSAFE_FILENAME_CHARS.sub("_", name or "arquivo")[:MAX_FILENAME_LENGTH]
