"""End-to-end tests for the federated login flow."""

import json
from urllib.parse import unquote_plus

import pytest
from fastapi.testclient import TestClient

from atlas.domain.repository import (
    AccountRepository,
    IdentityLinkRepository,
    MetricEventRepository,
)
from atlas.domain.value import MetricEventType
from atlas.interface.api.app import create_app
from tests.di import build_test_container

CALLBACK = "/login/oauth2/code/google"


@pytest.fixture
def container(monkeypatch):
    """Fresh all-mock container per test."""
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.delenv("FRONTEND__URL", raising=False)
    return build_test_container()


@pytest.fixture
def client(container):
    """Test client bound to the mock container."""
    with TestClient(create_app(container)) as test_client:
        yield test_client
        test_client.portal.call(container.close)


def _login(client: TestClient):
    return client.get(
        CALLBACK, params={"code": "test_code", "state": "test_state"}, follow_redirects=False
    )


def _metric_events(client: TestClient, container):
    repository = client.portal.call(container.get, MetricEventRepository)
    return repository.events


class TestLoginFlow:
    """Login initiation and callback handling."""

    def test_initiate_redirects_to_provider(self, client):
        """Initiation answers with a redirect to the authorization endpoint."""
        response = client.get("/oauth2/authorization/google", follow_redirects=False)

        assert response.status_code == 302
        assert "mock=true" in response.headers["location"]
        assert "state=" in response.headers["location"]

    def test_callback_sets_cookies_and_redirects(self, client):
        """Successful login writes both cookies and returns to the front end."""
        response = _login(client)

        assert response.status_code == 302
        assert response.headers["location"] == "http://localhost:3000/"
        assert response.cookies.get("jwt")

        snapshot = json.loads(unquote_plus(response.cookies["user_info"]))
        assert snapshot["email"] == "mock@example.com"
        assert snapshot["firstName"] == "Mock"
        assert snapshot["lastName"] == "User"

    def test_callback_redirect_follows_referrer(self, client):
        """Without a configured front end the referrer picks the origin."""
        response = client.get(
            CALLBACK,
            params={"code": "test_code", "state": "test_state"},
            headers={"Referer": "http://localhost:8080/login"},
            follow_redirects=False,
        )

        assert response.headers["location"] == "http://localhost:8080/"

    def test_callback_with_provider_error(self, client):
        """Provider errors go to the error page without cookies."""
        response = client.get(
            CALLBACK, params={"error": "access_denied"}, follow_redirects=False
        )

        assert response.status_code == 302
        assert response.headers["location"] == (
            "http://localhost:3000/oauth-error?error=access_denied"
        )
        assert "jwt" not in response.cookies

    def test_callback_without_code(self, client):
        """Missing code is treated as a failed login."""
        response = client.get(CALLBACK, follow_redirects=False)

        assert response.status_code == 302
        assert "/oauth-error?error=" in response.headers["location"]
        assert "jwt" not in response.cookies

    def test_failed_link_insert_leaves_no_account(self, client, container, monkeypatch):
        """A login that fails after creating the account keeps nothing."""
        links = client.portal.call(container.get, IdentityLinkRepository)
        accounts = client.portal.call(container.get, AccountRepository)

        async def failing_save(link):
            raise ConnectionError("link insert failed")

        monkeypatch.setattr(links, "save", failing_save)

        response = _login(client)

        assert response.status_code == 302
        assert "/oauth-error?error=link" in response.headers["location"]
        assert "jwt" not in response.cookies
        assert client.portal.call(accounts.find_by_email, "mock@example.com") is None
        assert _metric_events(client, container) == []

    def test_login_is_recorded(self, client, container):
        """Each successful login stores a LOGIN event."""
        _login(client)

        events = _metric_events(client, container)
        assert [e.event for e in events] == [MetricEventType.LOGIN]
        assert events[0].account_id is not None

    def test_repeat_login_reuses_account(self, client):
        """The same provider identity always maps to the same account."""
        _login(client)
        first = client.get("/api/user/me").json()

        _login(client)
        second = client.get("/api/user/me").json()

        assert first["id"] == second["id"]
        assert len(second["identities"]) == 1


class TestCurrentUser:
    """Authenticated profile endpoint."""

    def test_me_with_session_cookie(self, client):
        """The cookie set at login authenticates later requests."""
        _login(client)

        response = client.get("/api/user/me")

        assert response.status_code == 200
        data = response.json()
        assert data["email"] == "mock@example.com"
        assert data["name"] == "Mock User"
        assert data["identities"][0]["provider"] == "google"
        assert data["identities"][0]["is_primary"] is True

    def test_me_without_cookie(self, client):
        """Anonymous callers are rejected."""
        response = client.get("/api/user/me")

        assert response.status_code == 401
        assert response.json()["detail"] == "Authentication required"

    def test_me_with_forged_cookie(self, client):
        """A token that does not verify is treated as anonymous."""
        client.cookies.set("jwt", "eyJhbGciOiJIUzUxMiJ9.e30.forged")

        response = client.get("/api/user/me")

        assert response.status_code == 401


class TestLogout:
    """Logout endpoint."""

    def test_logout_clears_cookies(self, client, container):
        """Logout expires both cookies and records the event."""
        _login(client)

        response = client.post("/api/logout")

        assert response.status_code == 200
        assert response.json() == {"message": "Logged out successfully"}
        set_cookies = response.headers.get_list("set-cookie")
        assert any(c.startswith("jwt=") and "Max-Age=0" in c for c in set_cookies)
        assert any(c.startswith("user_info=") and "Max-Age=0" in c for c in set_cookies)

        events = _metric_events(client, container)
        assert [e.event for e in events] == [MetricEventType.LOGIN, MetricEventType.LOGOUT]

    def test_logout_without_session(self, client, container):
        """Logout always succeeds; nothing is recorded without a session."""
        response = client.post("/api/logout")

        assert response.status_code == 200
        assert _metric_events(client, container) == []


class TestPublicEndpoints:
    """Endpoints reachable without a session."""

    def test_save_metric(self, client, container):
        """Client events are stored as sent."""
        response = client.post(
            "/api/save-metric",
            json={"event": "PAGE_VIEW", "eventMetadata": {"page": "/home"}},
        )

        assert response.status_code == 201
        assert response.content == b""

        events = _metric_events(client, container)
        assert events[0].event == MetricEventType.PAGE_VIEW
        assert events[0].metadata == {"page": "/home"}
        assert events[0].account_id is None

    def test_save_metric_rejects_unknown_event(self, client):
        """Unknown event kinds fail validation."""
        response = client.post("/api/save-metric", json={"event": "TELEPORT"})

        assert response.status_code == 422

    def test_health(self, client):
        """Health check needs no session."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
