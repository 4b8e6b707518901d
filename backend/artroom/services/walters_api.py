"""
Walters Art Museum API client for resolving artwork titles.

Wraps the public objects endpoint:
    GET {walters_api_url}?apikey=...&title=...

The response is a JSON object whose ``Items`` array holds the matching
catalog entries. Callers treat the first entry as authoritative.
"""
import logging
from typing import Any, Optional
from urllib.parse import quote, urlencode

import httpx
from pydantic import ValidationError

from artroom.config import get_settings
from artroom.core.exceptions import MalformedResponseError, UpstreamUnavailableError
from artroom.models.art import CatalogEntry

logger = logging.getLogger(__name__)


def build_catalog_url(base_url: str, title: str, api_key: Optional[str] = None) -> str:
    """
    Build the catalog search URL.

    Spaces in the title are percent-encoded (%20), not form-encoded (+).
    """
    params: dict[str, Any] = {}
    if api_key:
        params["apikey"] = api_key
    params["title"] = title
    return f"{base_url}?{urlencode(params, quote_via=quote)}"


def derive_image_url(images: Optional[str], prefix: str, postfix: str) -> str:
    """
    Derive the public image URL from the catalog's raw image reference.

    Only the first character of the reference is used, framed by the
    image-service prefix and the width postfix.

    Raises:
        MalformedResponseError: If the image reference is empty
    """
    if not images:
        raise MalformedResponseError("Catalog entry has no image reference")
    return f"{prefix}{images[0]}{postfix}"


class WaltersAPI:
    """
    Async client for the Walters objects API.
    """

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        """Initialize Walters API client."""
        self.settings = get_settings()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client with connection pooling."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.settings.catalog_timeout_seconds,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def resolve_by_title(self, title: str) -> list[CatalogEntry]:
        """
        Search the catalog by title.

        Args:
            title: Free-text artwork title

        Returns:
            Catalog entries in the order the API returned them (may be empty)

        Raises:
            UpstreamUnavailableError: Transport failure, timeout or error status
            MalformedResponseError: Body is not JSON or lacks an Items array
        """
        client = await self._get_client()
        url = build_catalog_url(
            self.settings.walters_api_url, title, self.settings.walters_api_key
        )

        try:
            response = await client.get(url, headers={"Accept": "application/json"})
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Catalog returned {e.response.status_code} for '{title}'")
            raise UpstreamUnavailableError(
                f"Catalog returned HTTP {e.response.status_code}",
                {"status_code": e.response.status_code},
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Catalog request failed for '{title}': {e}")
            raise UpstreamUnavailableError(f"Catalog request failed: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise MalformedResponseError("Catalog response is not JSON") from e

        items = payload.get("Items") if isinstance(payload, dict) else None
        if not isinstance(items, list):
            raise MalformedResponseError("Catalog response has no Items array")

        try:
            return [CatalogEntry.model_validate(item) for item in items]
        except ValidationError as e:
            raise MalformedResponseError(f"Catalog entry did not validate: {e}") from e

    def image_url_for(self, entry: CatalogEntry) -> str:
        """Image URL for a catalog entry using the configured prefix/postfix."""
        return derive_image_url(
            entry.images,
            self.settings.walters_image_prefix,
            self.settings.walters_image_postfix,
        )


# Singleton instance for shared use
_walters_api: Optional[WaltersAPI] = None


async def get_walters_api() -> WaltersAPI:
    """Get shared WaltersAPI instance."""
    global _walters_api
    if _walters_api is None:
        _walters_api = WaltersAPI()
    return _walters_api


async def close_walters_api() -> None:
    """Close and drop the shared WaltersAPI instance."""
    global _walters_api
    if _walters_api is not None:
        await _walters_api.close()
        _walters_api = None
