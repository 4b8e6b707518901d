"""
Request and response schemas for API endpoints.
"""
from artroom.schemas.beacon import BeaconRegistration

__all__ = [
    "BeaconRegistration",
]
