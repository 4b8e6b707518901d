"""
Pydantic models for database documents and external service payloads.
"""
from artroom.models.beacon import Beacon
from artroom.models.art import ArtRecord, CatalogEntry
from artroom.models.moxtra import AccessToken, BinderCreate

__all__ = [
    "Beacon",
    "ArtRecord",
    "CatalogEntry",
    "AccessToken",
    "BinderCreate",
]
