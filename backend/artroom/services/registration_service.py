"""
Beacon registration workflow.

Steps run strictly in order, none retried:
1. Resolve the title in the Walters catalog (first entry wins)
2. Enrich it with the beacon, curator comment and image URL
3. Create a Moxtra binder named after the beacon's minor ID
4. Insert the beacon
5. Insert the art record

MongoDB gives no transaction across the two inserts (or the binder), so
steps 3-5 run as a saga: each completed side effect registers a
compensating action, and a later failure runs them newest first. With
compensation disabled the partial state is left in place and logged.
"""
import logging
from typing import Awaitable, Callable, Optional

from artroom.config import get_settings
from artroom.core.exceptions import (
    ArtroomError,
    AuthenticationError,
    CatalogError,
    MalformedResponseError,
    NoMatchError,
    ProvisioningError,
    UpstreamUnavailableError,
)
from artroom.database.databases import artroom_db
from artroom.database.store import MetadataStore
from artroom.models.art import ArtRecord
from artroom.schemas.beacon import BeaconRegistration
from artroom.services.binder_service import BinderService
from artroom.services.walters_api import WaltersAPI

logger = logging.getLogger(__name__)

Compensation = tuple[str, Callable[[], Awaitable[object]]]


class RegistrationService:
    """Service for registering beacons and their art."""

    def __init__(
        self,
        store: MetadataStore,
        catalog: WaltersAPI,
        binders: BinderService,
        compensate: Optional[bool] = None,
    ):
        self.store = store
        self.catalog = catalog
        self.binders = binders
        self.compensate = (
            get_settings().registration_compensation_enabled
            if compensate is None
            else compensate
        )

    async def register(self, form: BeaconRegistration) -> ArtRecord:
        """
        Register a beacon and the art piece named by ``form.title``.

        Args:
            form: Registration form

        Returns:
            The enriched ArtRecord as stored

        Raises:
            NoMatchError: Catalog has no entry for the title
            CatalogError: Catalog unreachable or returned unusable data
            ProvisioningError: Binder could not be created
            DuplicateRecordError: Beacon or (beacon, title) already registered
            StoreUnavailableError: MongoDB unreachable
        """
        logger.info(f"Registering '{form.title}' on beacon {form.minor_id}")

        # 1. Catalog lookup
        try:
            entries = await self.catalog.resolve_by_title(form.title)
        except (UpstreamUnavailableError, MalformedResponseError) as e:
            raise CatalogError(f"Catalog lookup failed: {e}") from e
        if not entries:
            raise NoMatchError(form.title)
        entry = entries[0]

        # 2. Enrichment
        try:
            image_url = self.catalog.image_url_for(entry)
        except MalformedResponseError as e:
            raise CatalogError(f"Catalog lookup failed: {e}") from e
        beacon = form.to_beacon()
        name = str(beacon.minor_id)

        # 3. Binder
        try:
            binder_id = await self.binders.create_binder(name)
        except (AuthenticationError, UpstreamUnavailableError, MalformedResponseError) as e:
            raise ProvisioningError(f"Could not create binder '{name}': {e}") from e

        art = ArtRecord.from_catalog(
            entry,
            beacon=beacon,
            curator_comment=form.description,
            image_url=image_url,
            binder_id=binder_id,
        )

        compensations: list[Compensation] = [
            (f"binder {binder_id}", lambda: self.binders.delete_binder(binder_id)),
        ]

        try:
            # 4. Beacon
            beacon_id = await self.store.insert(
                artroom_db.Collections.BEACON, beacon.to_document()
            )
            compensations.append(
                (
                    f"beacon {beacon.minor_id}",
                    lambda: self.store.delete(
                        artroom_db.Collections.BEACON, {"_id": beacon_id}
                    ),
                )
            )

            # 5. Art
            await self.store.insert(artroom_db.Collections.ART, art.to_document())
        except ArtroomError as e:
            await self._unwind(compensations, e)
            raise

        logger.info(
            f"Registered '{art.title}' on beacon {beacon.minor_id} with binder {binder_id}"
        )
        return art

    async def _unwind(self, compensations: list[Compensation], cause: Exception) -> None:
        """Run compensating actions newest first; failures are logged, not raised."""
        if not self.compensate:
            leftovers = ", ".join(label for label, _ in compensations)
            logger.error(f"Registration failed ({cause}); left in place: {leftovers}")
            return

        for label, action in reversed(compensations):
            try:
                await action()
            except ArtroomError as e:
                logger.error(
                    f"Registration failed ({cause}) and {label} could not be removed: {e}"
                )
            else:
                logger.info(f"Compensated {label} after failed registration")
