"""
Moxtra API client for collaboration binders.

Endpoints used:
- POST {moxtra_api_url}/oauth/token      Unique-ID grant, signed request
- POST {moxtra_api_url}/me/binders       Create a conversation binder
- DELETE {moxtra_api_url}/{binder_id}    Delete a binder (compensation)

The client is stateless with respect to tokens: callers pass the bearer
token in. Caching and refresh live in TokenProvider.
"""
import logging
from typing import Any, Awaitable, Optional

import httpx
from pydantic import ValidationError

from artroom.config import get_settings
from artroom.core.exceptions import (
    AuthenticationError,
    MalformedResponseError,
    UpstreamUnavailableError,
)
from artroom.core.security import current_timestamp_ms, generate_nonce, sign_request
from artroom.models.moxtra import AccessToken, BinderCreate

logger = logging.getLogger(__name__)

_AUTH_STATUSES = (401, 403)


class MoxtraAPI:
    """
    Async client for the Moxtra REST API.
    """

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        """Initialize Moxtra API client."""
        self.settings = get_settings()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client with connection pooling."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.settings.moxtra_api_url,
                timeout=self.settings.moxtra_timeout_seconds,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    # ==================== Authentication ====================

    def build_auth_params(self) -> dict[str, str]:
        """
        Query parameters for a freshly signed token request.

        A new nonce and timestamp are generated on every call.
        """
        nonce = generate_nonce()
        timestamp = current_timestamp_ms()
        signature = sign_request(
            self.settings.moxtra_client_id,
            nonce,
            timestamp,
            self.settings.moxtra_client_secret,
        )
        return {
            "client_id": self.settings.moxtra_client_id,
            "client_secret": self.settings.moxtra_client_secret,
            "grant_type": self.settings.moxtra_grant_type,
            "uniqueid": nonce,
            "timestamp": timestamp,
            "signature": signature,
        }

    async def authenticate(self) -> AccessToken:
        """
        Obtain an access token with the signed unique-ID grant.

        Returns:
            AccessToken parsed from the response

        Raises:
            AuthenticationError: On any failure; the token endpoint is the
                only way to authenticate, so every failure is an auth failure
        """
        client = await self._get_client()

        try:
            response = await client.post("/oauth/token", params=self.build_auth_params())
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Moxtra token request returned {e.response.status_code}")
            raise AuthenticationError(
                f"Moxtra token request returned HTTP {e.response.status_code}",
                {"status_code": e.response.status_code},
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Moxtra token request failed: {e}")
            raise AuthenticationError(f"Moxtra token request failed: {e}") from e

        try:
            return AccessToken.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise AuthenticationError(f"Moxtra token response is unusable: {e}") from e

    # ==================== Binders ====================

    async def create_binder(self, name: str, access_token: str) -> str:
        """
        Create a conversation binder.

        Args:
            name: Binder display name
            access_token: Bearer token

        Returns:
            Binder ID (``data.id`` of the response)

        Raises:
            AuthenticationError: Token rejected (401/403)
            UpstreamUnavailableError: Transport failure, timeout or error status
            MalformedResponseError: Response has no data.id
        """
        client = await self._get_client()
        body = BinderCreate(name=name).model_dump()

        response = await self._send(
            client.post(
                "/me/binders",
                json=body,
                headers={"Authorization": f"Bearer {access_token}"},
            ),
            action=f"create binder '{name}'",
        )

        try:
            payload: Any = response.json()
        except ValueError as e:
            raise MalformedResponseError("Binder response is not JSON") from e

        data = payload.get("data") if isinstance(payload, dict) else None
        binder_id = data.get("id") if isinstance(data, dict) else None
        if not binder_id:
            raise MalformedResponseError("Binder response has no data.id")
        return str(binder_id)

    async def delete_binder(self, binder_id: str, access_token: str) -> None:
        """
        Delete a binder.

        Raises:
            AuthenticationError: Token rejected (401/403)
            UpstreamUnavailableError: Transport failure, timeout or error status
        """
        client = await self._get_client()
        await self._send(
            client.delete(
                f"/{binder_id}",
                headers={"Authorization": f"Bearer {access_token}"},
            ),
            action=f"delete binder {binder_id}",
        )

    async def _send(self, request: Awaitable[httpx.Response], action: str) -> httpx.Response:
        """Await a request coroutine and translate httpx failures."""
        try:
            response = await request
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.error(f"Moxtra failed to {action}: HTTP {status_code}")
            if status_code in _AUTH_STATUSES:
                raise AuthenticationError(
                    f"Moxtra rejected the access token ({status_code})",
                    {"status_code": status_code},
                ) from e
            raise UpstreamUnavailableError(
                f"Moxtra returned HTTP {status_code}",
                {"status_code": status_code},
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Moxtra failed to {action}: {e}")
            raise UpstreamUnavailableError(f"Moxtra request failed: {e}") from e
        return response


# Singleton instance for shared use
_moxtra_api: Optional[MoxtraAPI] = None


async def get_moxtra_api() -> MoxtraAPI:
    """Get shared MoxtraAPI instance."""
    global _moxtra_api
    if _moxtra_api is None:
        _moxtra_api = MoxtraAPI()
    return _moxtra_api


async def close_moxtra_api() -> None:
    """Close and drop the shared MoxtraAPI instance."""
    global _moxtra_api
    if _moxtra_api is not None:
        await _moxtra_api.close()
        _moxtra_api = None
