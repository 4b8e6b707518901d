"""
Metadata store over the artroom MongoDB database.

Every operation is a single independent driver call; the Motor client's
connection pool hands each one its own socket, so no lock or session is
held across calls. Uniqueness is arbitrated by the indexes declared in
artroom_db.Collections.INDEXES: the loser of a concurrent duplicate insert
receives DuplicateRecordError.
"""
import logging
from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError, PyMongoError

from artroom.core.exceptions import (
    DuplicateRecordError,
    IndexCreationError,
    StoreUnavailableError,
)
from artroom.database.connections import get_database
from artroom.database.databases import artroom_db

logger = logging.getLogger(__name__)


class MetadataStore:
    """Insert/find/delete access to the beacon and art collections."""

    def __init__(self, db: AsyncIOMotorDatabase):
        """Initialize with the artroom database."""
        self.db = db

    async def ensure_indexes(self) -> None:
        """
        Create the unique indexes both collections rely on.

        Raises:
            IndexCreationError: If any index cannot be created. The store
                must not serve traffic without them.
        """
        for collection_name, indexes in artroom_db.Collections.INDEXES.items():
            collection = self.db[collection_name]
            for index_def in indexes:
                keys = index_def["keys"]
                kwargs = {k: v for k, v in index_def.items() if k != "keys"}
                try:
                    await collection.create_index(keys, **kwargs)
                except PyMongoError as e:
                    raise IndexCreationError(
                        f"Could not create index {kwargs.get('name')} on {collection_name}: {e}",
                        {"collection": collection_name, "index": kwargs.get("name")},
                    ) from e
                logger.info(f"Index {kwargs.get('name')} ready on {collection_name}")

    async def insert(self, collection: str, record: dict[str, Any]) -> Any:
        """
        Insert a single document.

        Args:
            collection: Collection name
            record: Document to insert (not modified)

        Returns:
            The inserted document's _id

        Raises:
            DuplicateRecordError: If a unique index rejects the document
            StoreUnavailableError: On connectivity loss or timeout
        """
        try:
            result = await self.db[collection].insert_one(dict(record))
        except DuplicateKeyError as e:
            logger.info(f"Duplicate document rejected by {collection}: {e}")
            raise DuplicateRecordError(collection) from e
        except PyMongoError as e:
            logger.error(f"Can't insert document into {collection}: {e}")
            raise StoreUnavailableError(
                f"Could not insert into '{collection}'",
                {"collection": collection},
            ) from e
        return result.inserted_id

    async def find(
        self,
        collection: str,
        query: dict[str, Any],
        skip: int = 0,
        limit: int = -1,
    ) -> list[dict[str, Any]]:
        """
        Find documents in insertion order.

        Args:
            collection: Collection name
            query: MongoDB filter
            skip: Number of matches to skip
            limit: Max matches to return; negative means no limit, 0 returns
                nothing (the driver would read 0 as unlimited)

        Returns:
            List of documents, possibly empty

        Raises:
            StoreUnavailableError: On connectivity loss or timeout
        """
        if limit == 0:
            return []

        try:
            cursor = self.db[collection].find(query).sort("_id", 1).skip(skip)
            if limit > 0:
                cursor = cursor.limit(limit)
            return await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error(f"Can't query {collection}: {e}")
            raise StoreUnavailableError(
                f"Could not query '{collection}'",
                {"collection": collection},
            ) from e

    async def delete(self, collection: str, query: dict[str, Any]) -> int:
        """
        Delete at most one matching document.

        Returns:
            Number of documents deleted (0 or 1)

        Raises:
            StoreUnavailableError: On connectivity loss or timeout
        """
        try:
            result = await self.db[collection].delete_one(query)
        except PyMongoError as e:
            logger.error(f"Can't delete from {collection}: {e}")
            raise StoreUnavailableError(
                f"Could not delete from '{collection}'",
                {"collection": collection},
            ) from e
        return result.deleted_count

    async def ping(self) -> Optional[dict[str, Any]]:
        """Round-trip to the server; used by the readiness probe."""
        try:
            return await self.db.command("ping")
        except PyMongoError as e:
            raise StoreUnavailableError(f"MongoDB ping failed: {e}") from e


async def get_metadata_store() -> MetadataStore:
    """Dependency to get a MetadataStore over the configured database."""
    return MetadataStore(await get_database())
