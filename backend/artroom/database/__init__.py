"""
Database module - MongoDB connection and the beacon/art metadata store.
"""
from artroom.database.connections import (
    get_mongo_client,
    close_connections,
    get_database,
)
from artroom.database.databases import artroom_db
from artroom.database.store import MetadataStore, get_metadata_store

__all__ = [
    "get_mongo_client",
    "close_connections",
    "get_database",
    "artroom_db",
    "MetadataStore",
    "get_metadata_store",
]
