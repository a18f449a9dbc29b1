"""Scraper package — registry fetch & table extraction."""

from rabapi.scraper.fetcher import RegistryError, RegistryFetcher, UpstreamError
from rabapi.scraper.models import RegistryLink, RegistryRecord
from rabapi.scraper.normalize import normalize_marca, safe_filename
from rabapi.scraper.parser import parse_registry_html

__all__ = [
    "RegistryFetcher",
    "RegistryError",
    "UpstreamError",
    "RegistryRecord",
    "RegistryLink",
    "normalize_marca",
    "safe_filename",
    "parse_registry_html",
]
