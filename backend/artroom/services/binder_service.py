"""
Binder provisioning: creates and deletes Moxtra binders using the
process-wide access token.
"""
import logging

from artroom.core.exceptions import AuthenticationError
from artroom.services.moxtra_api import MoxtraAPI
from artroom.services.token_provider import TokenProvider

logger = logging.getLogger(__name__)


class BinderService:
    """Service for collaboration binder operations."""

    def __init__(self, api: MoxtraAPI, tokens: TokenProvider):
        self.api = api
        self.tokens = tokens

    async def create_binder(self, name: str) -> str:
        """
        Create a conversation binder named ``name``.

        A rejected token is invalidated so the next call re-authenticates;
        this call still fails.

        Returns:
            Binder ID

        Raises:
            AuthenticationError: No token could be obtained or it was rejected
            UpstreamUnavailableError: Moxtra unreachable or returned an error
            MalformedResponseError: Moxtra returned no binder ID
        """
        token = await self.tokens.current_token()
        try:
            binder_id = await self.api.create_binder(name, token.access_token)
        except AuthenticationError:
            self.tokens.invalidate(token)
            raise
        logger.info(f"Created binder {binder_id} ('{name}')")
        return binder_id

    async def delete_binder(self, binder_id: str) -> None:
        """
        Delete a binder.

        Raises:
            AuthenticationError: No token could be obtained or it was rejected
            UpstreamUnavailableError: Moxtra unreachable or returned an error
        """
        token = await self.tokens.current_token()
        try:
            await self.api.delete_binder(binder_id, token.access_token)
        except AuthenticationError:
            self.tokens.invalidate(token)
            raise
        logger.info(f"Deleted binder {binder_id}")
