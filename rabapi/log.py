"""Logging setup shared by the API and the CLI."""

from __future__ import annotations

import logging

_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger once; later calls only adjust the level."""
    logging.basicConfig(level=level.upper(), format=_FORMAT)
    logging.getLogger("rabapi").setLevel(level.upper())
