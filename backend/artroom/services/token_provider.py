"""
Process-wide Moxtra access token.

One TokenProvider is created at startup and injected wherever a bearer
token is needed. Readers call current_token(); writes go through
refresh(), serialized by an asyncio.Lock so concurrent refreshes collapse
into a single authentication round-trip.
"""
import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional

from artroom.config import get_settings
from artroom.core.exceptions import AuthenticationError
from artroom.models.moxtra import AccessToken
from artroom.services.moxtra_api import MoxtraAPI, get_moxtra_api

logger = logging.getLogger(__name__)


class TokenProvider:
    """Caches the Moxtra access token and re-authenticates before it expires."""

    def __init__(
        self,
        api: MoxtraAPI,
        refresh_margin_seconds: Optional[int] = None,
        retry_seconds: Optional[int] = None,
    ):
        settings = get_settings()
        self.api = api
        self.refresh_margin_seconds = (
            settings.moxtra_token_refresh_margin_seconds
            if refresh_margin_seconds is None
            else refresh_margin_seconds
        )
        self.retry_seconds = (
            settings.moxtra_token_retry_seconds if retry_seconds is None else retry_seconds
        )
        self._token: Optional[AccessToken] = None
        self._lock = asyncio.Lock()
        self._refresh_task: Optional[asyncio.Task] = None

    @property
    def token(self) -> Optional[AccessToken]:
        """The cached token, if any. Never triggers authentication."""
        return self._token

    async def refresh(self) -> AccessToken:
        """
        Authenticate and replace the cached token.

        Raises:
            AuthenticationError: If Moxtra refuses the signed request
        """
        async with self._lock:
            return await self._authenticate_locked()

    async def current_token(self) -> AccessToken:
        """
        Return the cached token, authenticating first if there is none or
        the cached one has expired.

        Raises:
            AuthenticationError: If a token had to be fetched and could not be
        """
        token = self._token
        if token is not None and not token.is_expired():
            return token

        async with self._lock:
            # Another caller may have authenticated while we waited
            token = self._token
            if token is not None and not token.is_expired():
                return token
            return await self._authenticate_locked()

    def invalidate(self, token: Optional[AccessToken] = None) -> None:
        """
        Drop the cached token so the next reader re-authenticates.

        Args:
            token: Only invalidate if this is still the cached token, so a
                stale 401 cannot discard a token refreshed in the meantime
        """
        if token is None or self._token is token:
            logger.warning("Moxtra access token invalidated")
            self._token = None

    async def _authenticate_locked(self) -> AccessToken:
        token = await self.api.authenticate()
        self._token = token
        logger.info(f"Moxtra access token obtained, expires in {token.expires_in}s")
        return token

    # ==================== Scheduled refresh ====================

    def next_refresh_delay(self) -> float:
        """Seconds until the cached token should be refreshed."""
        token = self._token
        if token is None:
            return 0.0
        if token.expires_in <= 0:
            # No advertised lifetime: check again after the retry interval
            return float(self.retry_seconds)
        remaining = (token.expires_at - datetime.now(timezone.utc)).total_seconds()
        return max(remaining - self.refresh_margin_seconds, 0.0)

    async def run_refresh_loop(self) -> None:
        """
        Re-authenticate ahead of expiry until cancelled.

        A failed attempt is retried after retry_seconds, not after the
        next scheduled delay.
        """
        delay = self.next_refresh_delay()
        while True:
            await asyncio.sleep(delay)
            try:
                await self.refresh()
            except AuthenticationError as e:
                logger.error(
                    f"Scheduled Moxtra re-authentication failed, retrying in {self.retry_seconds}s: {e}"
                )
                delay = float(self.retry_seconds)
            else:
                delay = self.next_refresh_delay()

    def start_refresh(self) -> None:
        """Start the background refresh loop if it is not already running."""
        if self._refresh_task is None or self._refresh_task.done():
            self._refresh_task = asyncio.create_task(self.run_refresh_loop())

    async def stop_refresh(self) -> None:
        """Cancel the background refresh loop."""
        task = self._refresh_task
        self._refresh_task = None
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass


# Singleton instance for shared use
_token_provider: Optional[TokenProvider] = None


async def get_token_provider() -> TokenProvider:
    """Get shared TokenProvider instance."""
    global _token_provider
    if _token_provider is None:
        _token_provider = TokenProvider(await get_moxtra_api())
    return _token_provider


async def close_token_provider() -> None:
    """Stop the refresh loop and drop the shared TokenProvider."""
    global _token_provider
    if _token_provider is not None:
        await _token_provider.stop_refresh()
        _token_provider = None
