"""
Beacon model for the artroom beacon collection.
"""
from pydantic import BaseModel, Field


class Beacon(BaseModel):
    """
    A physical short-range transmitter.
    
    Stored verbatim in the beacon collection and embedded in every
    art document registered against it.
    """
    proximity_id: str = Field(..., alias="proxID", description="Vendor proximity identifier")
    major_id: int = Field(..., alias="majorID", description="Beacon major number")
    minor_id: int = Field(..., alias="minorID", ge=0, description="Beacon minor number, unique")

    class Config:
        populate_by_name = True
        frozen = True

    def to_document(self) -> dict:
        """MongoDB document layout: {proxID, majorID, minorID}."""
        return self.model_dump(by_alias=True)
