"""HTTP fetcher for the RAB answer page."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from rabapi.cache import PageCache
from rabapi.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)

# The registry still serves ISO-8859-1 and does not always say so in its headers.
UPSTREAM_ENCODING = "latin-1"
MARCA_PARAM = "textMarca"

_DEFAULT_HEADERS = {"User-Agent": "Mozilla/5.0"}


class RegistryError(Exception):
    """Base class for registry lookup failures."""


class UpstreamError(RegistryError):
    """The registry could not be reached or answered with a rejected status."""


def build_client(settings: Settings) -> httpx.AsyncClient:
    """Return an ``AsyncClient`` configured for the registry."""
    return httpx.AsyncClient(
        headers=_DEFAULT_HEADERS,
        timeout=settings.request_timeout,
        follow_redirects=True,
    )


class RegistryFetcher:
    """Fetches and caches decoded registry pages keyed by normalised marca.

    Both the HTTP client and the cache are supplied by the caller so they can
    be shared across requests (the API) or replaced (tests).
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        cache: PageCache[str],
        url: Optional[str] = None,
    ) -> None:
        self.client = client
        self.cache = cache
        self.url = url or default_settings.rab_url

    async def fetch(self, marca: str) -> str:
        """Return the registry page for *marca* decoded as Latin-1.

        Raises:
            UpstreamError: On network errors, timeouts, or a status outside
                the 2xx/3xx range.
        """
        cached = self.cache.get(marca)
        if cached is not None:
            logger.debug("cache hit for %s", marca)
            return cached

        logger.debug("cache miss for %s, querying %s", marca, self.url)
        try:
            response = await self.client.get(self.url, params={MARCA_PARAM: marca})
        except httpx.HTTPError as exc:
            logger.warning("registry request for %s failed: %s", marca, exc)
            raise UpstreamError(str(exc) or exc.__class__.__name__) from exc

        if not 200 <= response.status_code < 400:
            logger.warning(
                "registry answered %s for %s", response.status_code, marca
            )
            raise UpstreamError(
                f"Request failed with status code {response.status_code}"
            )

        html = response.content.decode(UPSTREAM_ENCODING)
        self.cache.set(marca, html)
        return html
