"""Tests for authorization request construction."""

from urllib.parse import parse_qs, urlparse

import pytest

from twitch_oauth import AuthorizationRequestBuilder, generate_random
from twitch_oauth.authorization import create_state


def query_of(url):
    return parse_qs(urlparse(url).query)


class TestStateGeneration:

    def test_generate_random_length_and_alphabet(self):
        value = generate_random(64)

        assert len(value) == 64
        assert all(c.isalnum() or c in "-._~" for c in value)

    def test_state_is_distinct_across_calls(self):
        states = {create_state() for _ in range(1000)}

        assert len(states) == 1000
        assert all(len(s) >= 30 for s in states)

    def test_state_is_not_biased_to_few_characters(self):
        joined = "".join(create_state() for _ in range(200))

        # 6000 draws from a 66 character alphabet should touch most of it
        assert len(set(joined)) > 50


class TestAuthorizationRequestBuilder:

    def test_scenario_url(self):
        builder = AuthorizationRequestBuilder(
            "abc123",
            "http://localhost:3000/auth/callback",
            scopes=["openid", "user:read:email"],
        )

        request = builder.build()
        url = request.authorization_url

        assert url.startswith("https://id.twitch.tv/oauth2/authorize?")
        assert "client_id=abc123" in url
        assert "scope=openid%20user%3Aread%3Aemail" in url
        assert f"state={request.expected_state}" in url
        assert len(request.expected_state) >= 30

    def test_query_parameters(self):
        builder = AuthorizationRequestBuilder("abc123", "http://localhost:3000/auth/callback")

        request = builder.build()
        query = query_of(request.authorization_url)

        assert query["response_type"] == ["token"]
        assert query["client_id"] == ["abc123"]
        assert query["scope"] == ["openid user:read:email user:read:follows"]
        assert query["force_verify"] == ["true"]
        assert query["redirect_uri"] == ["http://localhost:3000/auth/callback"]
        assert query["state"] == [request.expected_state]

    def test_fresh_state_per_build(self):
        builder = AuthorizationRequestBuilder("abc123", "http://localhost:3000/auth/callback")

        first = builder.build()
        second = builder.build()

        assert first.expected_state != second.expected_state
        assert first.authorization_url != second.authorization_url

    def test_custom_endpoint_and_longer_state(self):
        builder = AuthorizationRequestBuilder(
            "abc123",
            "http://localhost:3000/auth/callback",
            authorization_endpoint="https://id.example.test/authorize",
            state_length=48,
        )

        request = builder.build()

        assert request.authorization_url.startswith("https://id.example.test/authorize?")
        assert len(request.expected_state) == 48

    def test_short_state_rejected(self):
        with pytest.raises(ValueError):
            AuthorizationRequestBuilder("abc123", "http://localhost:3000/auth/callback", state_length=16)
