"""
Tests for the Walters catalog client.

These tests cover:
- Request shape (percent-encoded title, api key, Accept header)
- Response parsing and first-entry ordering
- Image URL derivation from the first character of Images
- Upstream and malformed response errors
"""

import httpx
import pytest
from unittest.mock import patch

from artroom.core.exceptions import MalformedResponseError, UpstreamUnavailableError
from artroom.models.art import CatalogEntry
from artroom.services.walters_api import (
    WaltersAPI,
    build_catalog_url,
    derive_image_url,
)


class TestBuildCatalogUrl:
    """Tests for build_catalog_url."""

    def test_spaces_are_percent_encoded(self):
        url = build_catalog_url("http://api.thewalters.org/v1/objects", "Starry Night")

        assert url == "http://api.thewalters.org/v1/objects?title=Starry%20Night"
        assert "+" not in url

    def test_api_key_is_sent_before_title(self):
        url = build_catalog_url("http://walters/v1/objects", "Saint George", "k3y")

        assert url == "http://walters/v1/objects?apikey=k3y&title=Saint%20George"


class TestDeriveImageUrl:
    """Tests for the first-character image URL contract."""

    def test_uses_only_first_character(self):
        url = derive_image_url(
            "abc123.jpg", "http://static.thewalters.org/images/", "?width=500"
        )

        assert url == "http://static.thewalters.org/images/a?width=500"

    def test_empty_images_is_malformed(self):
        with pytest.raises(MalformedResponseError):
            derive_image_url("", "prefix/", "?width=500")

    def test_missing_images_is_malformed(self):
        with pytest.raises(MalformedResponseError):
            derive_image_url(None, "prefix/", "?width=500")


class TestResolveByTitle:
    """Tests for WaltersAPI.resolve_by_title."""

    @pytest.mark.asyncio
    async def test_returns_entries_in_api_order(self, walters_api):
        entries = await walters_api.resolve_by_title("Starry Night")

        assert [e.title for e in entries] == ["Starry Night", "Starry Night (study)"]
        first = entries[0]
        assert first.object_id == 37346
        assert first.medium == "oil on canvas"
        assert first.images == "abc123.jpg"

    @pytest.mark.asyncio
    async def test_request_shape(self, walters_api, walters_handler):
        await walters_api.resolve_by_title("Starry Night")

        request = walters_handler.requests[0]
        assert request.method == "GET"
        assert request.headers["Accept"] == "application/json"
        assert b"title=Starry%20Night" in request.url.raw_path

    @pytest.mark.asyncio
    async def test_empty_items_returns_empty_list(self, make_handler, no_items_payload):
        handler = make_handler({("GET", "/v1/objects"): (200, no_items_payload)})
        api = WaltersAPI(transport=httpx.MockTransport(handler))
        try:
            assert await api.resolve_by_title("Nothing") == []
        finally:
            await api.close()

    @pytest.mark.asyncio
    async def test_error_status_raises_upstream_unavailable(self, make_handler):
        handler = make_handler({("GET", "/v1/objects"): (503, {"error": "down"})})
        api = WaltersAPI(transport=httpx.MockTransport(handler))
        try:
            with pytest.raises(UpstreamUnavailableError) as exc_info:
                await api.resolve_by_title("Starry Night")
        finally:
            await api.close()

        assert exc_info.value.details["status_code"] == 503

    @pytest.mark.asyncio
    async def test_transport_error_raises_upstream_unavailable(self, make_handler):
        def _timeout(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        handler = make_handler({("GET", "/v1/objects"): _timeout})
        api = WaltersAPI(transport=httpx.MockTransport(handler))
        try:
            with pytest.raises(UpstreamUnavailableError):
                await api.resolve_by_title("Starry Night")
        finally:
            await api.close()

    @pytest.mark.asyncio
    async def test_non_json_body_is_malformed(self, make_handler):
        handler = make_handler({
            ("GET", "/v1/objects"): lambda request: httpx.Response(200, text="<html>"),
        })
        api = WaltersAPI(transport=httpx.MockTransport(handler))
        try:
            with pytest.raises(MalformedResponseError):
                await api.resolve_by_title("Starry Night")
        finally:
            await api.close()

    @pytest.mark.asyncio
    async def test_missing_items_is_malformed(self, make_handler):
        handler = make_handler({("GET", "/v1/objects"): (200, {"ReturnStatus": False})})
        api = WaltersAPI(transport=httpx.MockTransport(handler))
        try:
            with pytest.raises(MalformedResponseError):
                await api.resolve_by_title("Starry Night")
        finally:
            await api.close()


class TestImageUrlFor:
    """Tests for configured image URL derivation."""

    def test_uses_configured_prefix_and_postfix(self):
        with patch("artroom.services.walters_api.get_settings") as mock_settings:
            mock_settings.return_value.walters_image_prefix = "https://img/"
            mock_settings.return_value.walters_image_postfix = "?w=1"
            api = WaltersAPI()

        entry = CatalogEntry(Title="Starry Night", Images="zebra.jpg")

        assert api.image_url_for(entry) == "https://img/z?w=1"
