"""
Database definitions and collection constants.
"""
from artroom.database.databases import artroom_db

__all__ = ["artroom_db"]
