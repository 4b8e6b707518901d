"""
API Routers module.
"""
from artroom.routers import beacons, health

__all__ = ["beacons", "health"]
