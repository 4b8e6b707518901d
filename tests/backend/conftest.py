"""
Backend-specific test fixtures and configuration.

These fixtures extend the global fixtures with helpers for testing the
FastAPI routes with service dependencies overridden.
"""

from typing import Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient


# =============================================================================
# FastAPI Test Client Fixtures
# =============================================================================

@pytest.fixture
def app():
    """
    The FastAPI app with dependency overrides cleared after each test.
    
    Note: the client below is not used as a context manager, so the
    lifespan (index creation, Moxtra authentication) does not run.
    """
    from artroom.main import app
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> Generator:
    """Create a TestClient for the FastAPI app."""
    yield TestClient(app)


# =============================================================================
# Service Fixtures
# =============================================================================

@pytest.fixture
def mock_registration_service():
    """
    Create a fully mocked RegistrationService.
    
    Configure failures with:
    
        mock_registration_service.register.side_effect = NoMatchError("x")
    """
    service = MagicMock()
    service.register = AsyncMock()
    return service


@pytest.fixture
def mock_lookup_service():
    """Create a fully mocked LookupService."""
    service = MagicMock()
    service.lookup_by_minor_id = AsyncMock()
    return service


@pytest.fixture
def client_with_mocks(app, client, mock_registration_service, mock_lookup_service):
    """TestClient whose beacon routes use the mocked services."""
    from artroom.routers.beacons import get_lookup_service, get_registration_service
    
    app.dependency_overrides[get_registration_service] = lambda: mock_registration_service
    app.dependency_overrides[get_lookup_service] = lambda: mock_lookup_service
    return client


# =============================================================================
# Response Assertion Helpers
# =============================================================================

@pytest.fixture
def assert_error_response():
    """Helper to assert error response structure."""
    def _assert(response, status_code: int, detail_contains: str = None):
        assert response.status_code == status_code
        data = response.json()
        assert "detail" in data
        if detail_contains:
            assert detail_contains.lower() in data["detail"].lower()
    return _assert
