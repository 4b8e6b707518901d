"""
Beacon registration request schema.
"""
from typing import Optional

from pydantic import BaseModel, Field

from artroom.models.beacon import Beacon


class BeaconRegistration(BaseModel):
    """
    Form submitted by the registration desk.
    
    Only the title and the beacon triple drive the workflow; date and
    author are accepted and passed through uninterpreted.
    """
    date: Optional[str] = Field(None, description="Submission date, uninterpreted")
    author: Optional[str] = Field(None, description="Submitting author, uninterpreted")
    title: str = Field(..., min_length=1, description="Artwork title to search in the catalog")
    proximity_id: str = Field(..., alias="proxID", description="Beacon proximity identifier")
    major_id: int = Field(..., alias="majorID", description="Beacon major number")
    minor_id: int = Field(..., alias="minorID", ge=0, description="Beacon minor number")
    description: str = Field("", description="Curator comment")

    class Config:
        populate_by_name = True

    def to_beacon(self) -> Beacon:
        """Beacon described by this form."""
        return Beacon(
            proximity_id=self.proximity_id,
            major_id=self.major_id,
            minor_id=self.minor_id,
        )
