"""
Moxtra collaboration service payloads.
"""
from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, Field


class AccessToken(BaseModel):
    """OAuth token returned by the Moxtra unique-ID grant."""
    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(0, description="Lifetime in seconds")
    scope: str = ""
    obtained_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def expires_at(self) -> datetime:
        return self.obtained_at + timedelta(seconds=self.expires_in)

    def is_expired(self, margin_seconds: int = 0) -> bool:
        """True once the token is within margin_seconds of expiry."""
        if self.expires_in <= 0:
            return False
        now = datetime.now(timezone.utc)
        return now >= self.expires_at - timedelta(seconds=margin_seconds)


class BinderCreate(BaseModel):
    """Body of POST /me/binders."""
    name: str
    conversation: bool = True
