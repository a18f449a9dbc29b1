"""Data models for the registry scraper."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class RegistryLink:
    """An anchor found on the registry page."""

    text: str
    href: str


@dataclass
class RegistryRecord:
    """Fields, links and the not-found hint scraped from one registry page."""

    fields: Dict[str, str] = field(default_factory=dict)
    links: List[RegistryLink] = field(default_factory=list)
    maybe_not_found: bool = False

    def is_not_found(self) -> bool:
        """True only when the page says so *and* no field could be extracted."""
        return self.maybe_not_found and not self.fields

    def to_dict(self) -> dict[str, Any]:
        return {
            "fields": dict(self.fields),
            "links": [{"text": lnk.text, "href": lnk.href} for lnk in self.links],
            "maybeNotFound": self.maybe_not_found,
        }
