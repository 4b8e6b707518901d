"""
Exception hierarchy for the beacon registration server.

Services raise these; routers translate them into HTTP responses.

    ArtroomError
        ├── UpstreamUnavailableError   - external service unreachable or timed out
        ├── MalformedResponseError     - external service answered with unusable data
        ├── AuthenticationError        - collaboration service rejected our credentials
        ├── CatalogError               - catalog lookup failed during registration
        ├── NoMatchError               - catalog returned no entry for the title
        ├── ProvisioningError          - binder could not be created
        ├── DuplicateRecordError       - a unique index rejected an insert
        ├── StoreUnavailableError      - MongoDB unreachable or timed out
        ├── IndexCreationError         - startup could not declare an index
        ├── BeaconNotFoundError        - no beacon with the requested minor ID
        └── NoAssociatedArtError       - a beacon exists but has no art
"""
from typing import Any, Optional


class ArtroomError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class UpstreamUnavailableError(ArtroomError):
    """An external HTTP service could not be reached or returned an error status."""


class MalformedResponseError(ArtroomError):
    """An external HTTP service returned a body we cannot interpret."""


class AuthenticationError(ArtroomError):
    """The collaboration service refused authentication or the token."""


class CatalogError(ArtroomError):
    """Catalog lookup failed (transport or decoding)."""


class NoMatchError(ArtroomError):
    """The catalog had no entry for the requested title."""

    def __init__(self, title: str):
        super().__init__(f"No catalog entry matches title '{title}'", {"title": title})
        self.title = title


class ProvisioningError(ArtroomError):
    """The collaboration binder could not be created."""


class DuplicateRecordError(ArtroomError):
    """A unique index rejected the insert."""

    def __init__(self, collection: str, message: Optional[str] = None):
        super().__init__(
            message or f"Duplicate record in '{collection}'",
            {"collection": collection},
        )
        self.collection = collection


class StoreUnavailableError(ArtroomError):
    """MongoDB could not complete the operation."""


class IndexCreationError(ArtroomError):
    """A required index could not be created at startup."""


class BeaconNotFoundError(ArtroomError):
    """No beacon is registered under the requested minor ID."""

    def __init__(self, minor_id: int):
        super().__init__(f"Beacon {minor_id} not found", {"minor_id": minor_id})
        self.minor_id = minor_id


class NoAssociatedArtError(ArtroomError):
    """A beacon exists but no art record embeds it."""

    def __init__(self, minor_id: int):
        super().__init__(
            f"Beacon {minor_id} has no associated art",
            {"minor_id": minor_id},
        )
        self.minor_id = minor_id
