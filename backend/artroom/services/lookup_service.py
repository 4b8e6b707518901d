"""
Art lookup by beacon minor ID.

Art documents embed a copy of their beacon, so the join is done here:
fetch the beacon(s), then the art whose embedded beacon matches each one.
"""
import logging

from artroom.core.exceptions import BeaconNotFoundError, NoAssociatedArtError
from artroom.database.databases import artroom_db
from artroom.database.store import MetadataStore
from artroom.models.art import ArtRecord
from artroom.models.beacon import Beacon

logger = logging.getLogger(__name__)


class LookupService:
    """Service for resolving art by beacon."""

    def __init__(self, store: MetadataStore):
        self.store = store

    async def lookup_by_minor_id(self, minor_id: int) -> list[ArtRecord]:
        """
        Get all art registered on the beacon with ``minor_id``.
        
        Args:
            minor_id: Beacon minor number
            
        Returns:
            Art records in store order, concatenated across matching beacons
            
        Raises:
            BeaconNotFoundError: No beacon has this minor ID
            NoAssociatedArtError: A matching beacon has no art
            StoreUnavailableError: MongoDB unreachable
        """
        beacon_docs = await self.store.find(
            artroom_db.Collections.BEACON, {"minorID": minor_id}
        )
        if not beacon_docs:
            raise BeaconNotFoundError(minor_id)
        
        if len(beacon_docs) > 1:
            logger.warning(
                f"{len(beacon_docs)} beacons share minorID {minor_id}; "
                "the unique index is missing or was bypassed"
            )
        
        records: list[ArtRecord] = []
        for doc in beacon_docs:
            beacon = Beacon.model_validate(doc)
            art_docs = await self.store.find(
                artroom_db.Collections.ART,
                artroom_db.beacon_match(beacon.to_document()),
            )
            if not art_docs:
                logger.warning(f"Beacon {minor_id} ({beacon.proximity_id}) has no art")
                raise NoAssociatedArtError(minor_id)
            records.extend(ArtRecord.model_validate(art) for art in art_docs)
        
        return records
