"""
Global test fixtures for Artroom.

This module provides shared fixtures for all tests including:
- Mock MongoDB (mongomock-motor) with the real indexes
- Recorded httpx MockTransports for the Walters and Moxtra APIs
- Registration form and beacon factories
- Fixture loading utilities
"""

import json
import sys
from pathlib import Path
from typing import Any, Callable, Union

import httpx
import pytest
import pytest_asyncio

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))


# =============================================================================
# Fixture Loading Utilities
# =============================================================================

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(filename: str, subdir: str = "walters_responses") -> dict:
    """
    Load a JSON fixture file.

    Args:
        filename: Name of the JSON file
        subdir: Subdirectory under fixtures/

    Returns:
        Parsed JSON data
    """
    filepath = FIXTURES_DIR / subdir / filename
    with open(filepath) as f:
        return json.load(f)


# =============================================================================
# HTTP Mocking
# =============================================================================

Route = Union[tuple[int, Any], Callable[[httpx.Request], httpx.Response]]


class RecordingHandler:
    """
    httpx.MockTransport handler that routes on (method, path) and records
    every request it sees.

    A route is either ``(status_code, json_payload)`` or a callable taking
    the request and returning an httpx.Response.
    """

    def __init__(self, routes: dict[tuple[str, str], Route]):
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"error": "no route"})
        if callable(route):
            return route(request)
        status_code, payload = route
        return httpx.Response(status_code, json=payload)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        """Requests recorded for one route."""
        return [
            r for r in self.requests
            if r.method == method and r.url.path == path
        ]


@pytest.fixture
def starry_night_payload() -> dict:
    """Walters response with two matches, 'Starry Night' first."""
    return load_fixture("starry_night.json")


@pytest.fixture
def no_items_payload() -> dict:
    """Walters response with no matches."""
    return load_fixture("no_items.json")


@pytest.fixture
def token_payload() -> dict:
    """Moxtra token response."""
    return load_fixture("token.json", subdir="moxtra_responses")


@pytest.fixture
def binder_payload() -> dict:
    """Moxtra binder creation response."""
    return load_fixture("binder_created.json", subdir="moxtra_responses")


@pytest.fixture
def walters_handler(starry_night_payload) -> RecordingHandler:
    """Walters API answering every title with the Starry Night fixture."""
    return RecordingHandler({("GET", "/v1/objects"): (200, starry_night_payload)})


@pytest.fixture
def moxtra_handler(token_payload, binder_payload) -> RecordingHandler:
    """Moxtra API that authenticates, creates and deletes binders."""
    binder_id = binder_payload["data"]["id"]
    return RecordingHandler({
        ("POST", "/oauth/token"): (200, token_payload),
        ("POST", "/me/binders"): (200, binder_payload),
        ("DELETE", f"/{binder_id}"): (200, {"code": "RESPONSE_SUCCESS"}),
    })


@pytest_asyncio.fixture
async def walters_api(walters_handler):
    """WaltersAPI wired to the recording handler."""
    from artroom.services.walters_api import WaltersAPI

    api = WaltersAPI(transport=httpx.MockTransport(walters_handler))
    yield api
    await api.close()


@pytest_asyncio.fixture
async def moxtra_api(moxtra_handler):
    """MoxtraAPI wired to the recording handler."""
    from artroom.services.moxtra_api import MoxtraAPI

    api = MoxtraAPI(transport=httpx.MockTransport(moxtra_handler))
    yield api
    await api.close()


@pytest.fixture
def token_provider(moxtra_api):
    """TokenProvider over the mocked Moxtra API."""
    from artroom.services.token_provider import TokenProvider

    return TokenProvider(moxtra_api, refresh_margin_seconds=60, retry_seconds=1)


@pytest.fixture
def binder_service(moxtra_api, token_provider):
    """BinderService over the mocked Moxtra API."""
    from artroom.services.binder_service import BinderService

    return BinderService(moxtra_api, token_provider)


# =============================================================================
# MongoDB Fixtures (mongomock-motor)
# =============================================================================

@pytest_asyncio.fixture
async def mock_async_mongo_client():
    """
    Create an async mock MongoDB client using mongomock-motor.
    """
    try:
        from mongomock_motor import AsyncMongoMockClient
        client = AsyncMongoMockClient()
        yield client
        client.close()
    except ImportError:
        pytest.skip("mongomock-motor not installed")


@pytest_asyncio.fixture
async def mock_artroom_db(mock_async_mongo_client):
    """Provide mock artroom database."""
    yield mock_async_mongo_client["artroomServer"]


@pytest_asyncio.fixture
async def metadata_store(mock_artroom_db):
    """MetadataStore with the production indexes created."""
    from artroom.database.store import MetadataStore

    store = MetadataStore(mock_artroom_db)
    await store.ensure_indexes()
    yield store


# =============================================================================
# Domain Fixtures
# =============================================================================

@pytest.fixture
def registration_data() -> dict:
    """Registration form body as the desk posts it."""
    return {
        "date": "2016-02-20",
        "author": "desk",
        "title": "Starry Night",
        "proxID": "p1",
        "majorID": 1,
        "minorID": 42,
        "description": "On loan",
    }


@pytest.fixture
def registration_form(registration_data):
    """Parsed registration form."""
    from artroom.schemas.beacon import BeaconRegistration

    return BeaconRegistration.model_validate(registration_data)


@pytest.fixture
def make_art_document() -> Callable[..., dict]:
    """Factory for art documents as stored in MongoDB."""
    def _make(minor_id: int = 42, title: str = "Starry Night", **overrides) -> dict:
        doc = {
            "objectID": 37346,
            "title": title,
            "author": "Unknown",
            "medium": "oil on canvas",
            "description": "A night sky over a village.",
            "collection": "Paintings",
            "images": "abc123.jpg",
            "beacon": {"proxID": "p1", "majorID": 1, "minorID": minor_id},
            "curatorComment": "On loan",
            "imageURL": "http://static.thewalters.org/images/a?width=500",
            "binderID": "BbPk6Dq2nLdl8WcA3Ar0DlE",
        }
        doc.update(overrides)
        return doc
    return _make


@pytest.fixture
def make_handler() -> Callable[..., RecordingHandler]:
    """Factory for RecordingHandler instances in individual tests."""
    return RecordingHandler
