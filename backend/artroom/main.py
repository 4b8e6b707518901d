"""
Artroom Backend - FastAPI Application

Registers museum beacons against Walters catalog entries, provisions a
Moxtra binder per beacon, and serves the art registered on each beacon.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from artroom.config import get_settings
from artroom.database.connections import close_connections
from artroom.database.store import get_metadata_store
from artroom.routers import beacons, health
from artroom.services.moxtra_api import close_moxtra_api
from artroom.services.token_provider import close_token_provider, get_token_provider
from artroom.services.walters_api import close_walters_api

logger = logging.getLogger("artroom")


def configure_logging(level: str) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup (any failure aborts startup):
    - Create the unique indexes on beacon and art
    - Authenticate with Moxtra and start the token refresh loop

    Shutdown:
    - Stop the refresh loop
    - Close HTTP clients and the database connection
    """
    configure_logging(get_settings().log_level)
    logger.info("Server is warming up...")

    try:
        store = await get_metadata_store()
        await store.ensure_indexes()
        logger.info("Database indexes created")

        tokens = await get_token_provider()
        await tokens.refresh()
        tokens.start_refresh()
        logger.info("Moxtra access token ready")
    except Exception as e:
        logger.error(f"Startup failed: {e}")
        await close_clients()
        raise

    yield

    # Shutdown
    logger.info("Shutting down Artroom Backend...")
    await close_clients()


async def close_clients() -> None:
    """Stop the token refresh loop and close every outbound client."""
    await close_token_provider()
    await close_moxtra_api()
    await close_walters_api()
    await close_connections()
    logger.info("Connections closed")


# Create FastAPI application
app = FastAPI(
    title="Artroom API",
    description="""
## Artroom Beacon API

Associates physical beacons with artwork from the Walters Art Museum catalog.

### Endpoints
- **POST /beacon**: Register a beacon and the art piece matching a title.
  Creates a Moxtra conversation binder named after the beacon's minor ID.
- **GET /beacon/{minorID}**: List the art registered on a beacon.
    """,
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept"],
)

# Include routers
app.include_router(health.router)
app.include_router(beacons.router)


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Artroom API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
    }
