"""Tests for the Helix client, bearer attachment and revocation."""

from urllib.parse import parse_qs

import httpx
import pytest
from pydantic import ValidationError

from twitch_oauth import (
    HeaderCredentialAttacher,
    TwitchAPIClient,
    TwitchUser,
    create_auth_session,
    revoke_token,
)
from twitch_oauth.constants import REVOKE_URL
from conftest import CLIENT_ID, PROFILE, REDIRECT_URI, FakeRedirect, approve


class TestTwitchAPIClient:

    @pytest.mark.asyncio
    async def test_get_users(self, api_client, helix):
        users = await api_client.get_users()

        assert users == [TwitchUser.model_validate(PROFILE)]
        assert users[0].id == 141981764
        assert str(helix.requests[0].url) == "https://api.twitch.tv/helix/users"

    @pytest.mark.asyncio
    async def test_http_error_propagates(self, api_client, helix):
        helix.status_code = 401

        with pytest.raises(httpx.HTTPStatusError):
            await api_client.get_users()

    @pytest.mark.asyncio
    async def test_malformed_record(self, api_client, helix):
        helix.users = [{"id": "not-a-number", "display_name": "x", "email": "y", "profile_image_url": "z"}]

        with pytest.raises(ValidationError):
            await api_client.get_users()

    def test_client_id_header(self, api_client, http_client):
        api_client.set_client_id(CLIENT_ID)

        assert http_client.headers["Client-Id"] == CLIENT_ID


class TestHeaderCredentialAttacher:

    def test_set_and_clear(self, http_client):
        attacher = HeaderCredentialAttacher(http_client)

        attacher.set("tok")
        assert http_client.headers["Authorization"] == "Bearer tok"
        assert attacher.is_attached

        attacher.clear()
        assert "Authorization" not in http_client.headers
        assert not attacher.is_attached

    def test_clear_without_header(self, http_client):
        attacher = HeaderCredentialAttacher(http_client)

        attacher.clear()

        assert not attacher.is_attached


class TestRevokeToken:

    @pytest.mark.asyncio
    async def test_posts_form(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            await revoke_token("tok", CLIENT_ID, http_client=client)

        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == REVOKE_URL
        assert parse_qs(request.content.decode()) == {"client_id": [CLIENT_ID], "token": ["tok"]}

    @pytest.mark.asyncio
    async def test_error_status_raises(self):
        def handler(request):
            return httpx.Response(400, json={"status": 400, "message": "Invalid token"})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(httpx.HTTPStatusError):
                await revoke_token("tok", CLIENT_ID, http_client=client)


@pytest.mark.asyncio
async def test_create_auth_session_wiring(api_client, http_client, helix):
    controller = create_auth_session(
        CLIENT_ID,
        REDIRECT_URI,
        FakeRedirect(approve()),
        scopes=["openid"],
        api_client=api_client,
    )

    await controller.sign_in()

    assert http_client.headers["Client-Id"] == CLIENT_ID
    assert http_client.headers["Authorization"].startswith("Bearer ")
    assert controller.builder.scopes == ("openid",)
    assert controller.builder.redirect_uri == REDIRECT_URI
