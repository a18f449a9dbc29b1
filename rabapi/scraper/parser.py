"""Turns a decoded registry page into a :class:`RegistryRecord`.

The RAB answer page is an old ASP layout built from nested tables where most
data rows are ``<td>Label:</td><td>Value</td>``.  Nothing here validates the
layout; an unexpected page simply yields an empty record.
"""

from __future__ import annotations

from typing import List

from bs4 import BeautifulSoup

from rabapi.scraper.models import RegistryLink, RegistryRecord
from rabapi.scraper.normalize import collapse_whitespace

# Phrases the registry uses when a tail number has no record.
NOT_FOUND_HINTS = (
    "não encontrada",
    "nao encontrada",
    "nenhum registro",
    "nenhuma aeronave",
    "não existe",
    "nao existe",
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _detect_not_found(soup: BeautifulSoup) -> bool:
    container = soup.body or soup
    body_text = collapse_whitespace(container.get_text()).lower()
    return any(hint in body_text for hint in NOT_FOUND_HINTS)


def _extract_fields(soup: BeautifulSoup) -> dict[str, str]:
    """Collect label/value pairs from two-cell (or wider) table rows."""
    fields: dict[str, str] = {}
    for tr in soup.select("table tr"):
        # Cells are counted across nested tables too, as a browser query would.
        tds = tr.find_all("td")
        if len(tds) < 2:
            continue
        key = collapse_whitespace(tds[0].get_text())
        if key.endswith(":"):
            key = key[:-1]
        val = collapse_whitespace(tds[1].get_text())
        if key and val:
            fields[key] = val
    return fields


def _extract_links(soup: BeautifulSoup) -> List[RegistryLink]:
    links: List[RegistryLink] = []
    for a in soup.find_all("a", href=True):
        href = a["href"]
        text = collapse_whitespace(a.get_text())
        if not href or not text:
            continue
        links.append(RegistryLink(text=text, href=href))
    return links


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_registry_html(html: str) -> RegistryRecord:
    """Extract fields, links and the not-found hint from *html*."""
    soup = BeautifulSoup(html, "lxml")
    return RegistryRecord(
        fields=_extract_fields(soup),
        links=_extract_links(soup),
        maybe_not_found=_detect_not_found(soup),
    )
