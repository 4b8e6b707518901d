"""
Beacons router for registration and art lookup.
"""
from fastapi import APIRouter, Depends, HTTPException, Path, Response, status

from artroom.core.exceptions import (
    BeaconNotFoundError,
    CatalogError,
    DuplicateRecordError,
    NoAssociatedArtError,
    NoMatchError,
    ProvisioningError,
    StoreUnavailableError,
)
from artroom.database.store import MetadataStore, get_metadata_store
from artroom.models.art import ArtRecord
from artroom.schemas.beacon import BeaconRegistration
from artroom.services.binder_service import BinderService
from artroom.services.lookup_service import LookupService
from artroom.services.moxtra_api import get_moxtra_api
from artroom.services.registration_service import RegistrationService
from artroom.services.token_provider import get_token_provider
from artroom.services.walters_api import get_walters_api

router = APIRouter(prefix="/beacon", tags=["Beacons"])


async def get_registration_service(
    store: MetadataStore = Depends(get_metadata_store),
) -> RegistrationService:
    """Dependency to get RegistrationService instance."""
    binders = BinderService(await get_moxtra_api(), await get_token_provider())
    return RegistrationService(store, await get_walters_api(), binders)


async def get_lookup_service(
    store: MetadataStore = Depends(get_metadata_store),
) -> LookupService:
    """Dependency to get LookupService instance."""
    return LookupService(store)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_class=Response,
    summary="Register a beacon and its art",
)
async def register_beacon(
    body: BeaconRegistration,
    registration_service: RegistrationService = Depends(get_registration_service),
):
    """
    Register a beacon against the catalog entry matching `title`.
    
    - **title**: Artwork title searched in the Walters catalog
    - **proxID**, **majorID**, **minorID**: Beacon identity
    - **description**: Curator comment
    
    Returns 201 with an empty body. A beacon or (beacon, title) pair that
    is already registered returns 409.
    """
    try:
        await registration_service.register(body)
    except DuplicateRecordError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Already registered: {e}",
        )
    except (NoMatchError, CatalogError, ProvisioningError, StoreUnavailableError) as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        )
    
    return Response(status_code=status.HTTP_201_CREATED)


@router.get(
    "/{minor_id}",
    response_model=list[ArtRecord],
    summary="Get art registered on a beacon",
)
async def get_beacon_art(
    minor_id: int = Path(..., ge=0, description="Beacon minor number"),
    lookup_service: LookupService = Depends(get_lookup_service),
):
    """
    List the art pieces registered on the beacon with `minor_id`.
    
    Returns 404 if the beacon is unknown or has no art.
    """
    try:
        return await lookup_service.lookup_by_minor_id(minor_id)
    except (BeaconNotFoundError, NoAssociatedArtError) as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except StoreUnavailableError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        )
