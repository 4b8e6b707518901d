"""
Art models: the catalog entry as the Walters API returns it, and the
enriched record stored in the art collection.
"""
from typing import Optional

from pydantic import BaseModel, Field

from artroom.models.beacon import Beacon


class CatalogEntry(BaseModel):
    """One item of a Walters objects API response."""
    object_id: Optional[int] = Field(None, alias="ObjectID")
    title: str = Field("", alias="Title")
    author: Optional[str] = Field(None, alias="Author")
    medium: Optional[str] = Field(None, alias="Medium")
    description: Optional[str] = Field(None, alias="Description")
    collection: Optional[str] = Field(None, alias="Collection")
    images: Optional[str] = Field(None, alias="Images")

    class Config:
        populate_by_name = True
        extra = "ignore"


class ArtRecord(BaseModel):
    """
    Art document model for the artroom art collection.
    
    Catalog fields are copied from the CatalogEntry; the beacon is an
    embedded copy, not a reference.
    """
    object_id: Optional[int] = Field(None, alias="objectID", description="Catalog object ID")
    title: str = Field(..., description="Artwork title")
    author: Optional[str] = Field(None, description="Artist")
    medium: Optional[str] = Field(None, description="Medium")
    description: Optional[str] = Field(None, description="Catalog description")
    collection: Optional[str] = Field(None, description="Catalog collection")
    images: Optional[str] = Field(None, description="Raw catalog image reference")
    beacon: Beacon = Field(..., description="Beacon this piece is registered against")
    curator_comment: str = Field("", alias="curatorComment", description="Curator's description")
    image_url: str = Field(..., alias="imageURL", description="Derived image URL")
    binder_id: str = Field(..., alias="binderID", description="Moxtra binder ID")

    class Config:
        populate_by_name = True
        extra = "ignore"

    @classmethod
    def from_catalog(
        cls,
        entry: CatalogEntry,
        beacon: Beacon,
        curator_comment: str,
        image_url: str,
        binder_id: str,
    ) -> "ArtRecord":
        """Enrich a catalog entry with the site-specific fields."""
        return cls(
            object_id=entry.object_id,
            title=entry.title,
            author=entry.author,
            medium=entry.medium,
            description=entry.description,
            collection=entry.collection,
            images=entry.images,
            beacon=beacon,
            curator_comment=curator_comment,
            image_url=image_url,
            binder_id=binder_id,
        )

    def to_document(self) -> dict:
        """MongoDB document layout with camelCase keys and the embedded beacon."""
        return self.model_dump(by_alias=True)
