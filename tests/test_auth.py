from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from fastapi import HTTPException
from supabase_auth.constants import STORAGE_KEY

from trip_planner.config import settings
from trip_planner.database.supabase_client import SupabaseClient
from trip_planner.main import app
from trip_planner.modules.auth.routes import get_auth_service
from trip_planner.modules.auth.service import AuthService


@pytest.fixture
def auth_service(client):
    service = MagicMock()
    service.start_oauth.return_value = ("https://accounts.example.com/o/oauth2?state=1", "verifier-123")
    service.exchange_code.return_value = SimpleNamespace(access_token="access-1", refresh_token="refresh-1")
    app.dependency_overrides[get_auth_service] = lambda: service
    return service


def set_cookie_names(response):
    return {c.split("=", 1)[0]: c for c in response.headers.get_list("set-cookie")}


def test_login_page_lists_providers(client):
    response = client.get("/login", params={"message": "Could not authenticate user"})
    assert response.status_code == 200
    assert response.json() == {"providers": ["google", "facebook"], "message": "Could not authenticate user"}


def test_login_redirects_to_provider_and_keeps_verifier(client, auth_service):
    response = client.post("/login", json={"provider": "google"})

    assert response.status_code == 303
    assert response.headers["location"].startswith("https://accounts.example.com/")
    cookies = set_cookie_names(response)
    assert cookies[settings.code_verifier_cookie].startswith(f"{settings.code_verifier_cookie}=verifier-123")
    auth_service.start_oauth.assert_called_once_with("google", f"{settings.site_url}/auth/callback")


def test_login_rejects_unknown_provider(client, auth_service):
    assert client.post("/login", json={"provider": "myspace"}).status_code == 422
    auth_service.start_oauth.assert_not_called()


def test_login_failure_returns_to_login(client, auth_service):
    auth_service.start_oauth.side_effect = Exception("provider disabled")
    response = client.post("/login", json={"provider": "facebook"})
    assert response.status_code == 303
    assert response.headers["location"].startswith("/login?message=")


def test_callback_sets_session_cookies(client, auth_service):
    client.cookies.set(settings.code_verifier_cookie, "verifier-123")

    response = client.get("/auth/callback", params={"code": "abc", "next": "/trips/trip-1"})

    assert response.status_code == 303
    assert response.headers["location"] == "/trips/trip-1"
    cookies = set_cookie_names(response)
    assert cookies[settings.access_token_cookie].startswith(f"{settings.access_token_cookie}=access-1")
    assert cookies[settings.refresh_token_cookie].startswith(f"{settings.refresh_token_cookie}=refresh-1")
    assert settings.code_verifier_cookie in cookies
    auth_service.exchange_code.assert_called_once_with("abc", "verifier-123", f"{settings.site_url}/auth/callback")


@pytest.mark.parametrize("next_path", [None, "https://evil.example.com", "//evil.example.com"])
def test_callback_only_follows_relative_next(client, auth_service, next_path):
    client.cookies.set(settings.code_verifier_cookie, "verifier-123")
    params = {"code": "abc"}
    if next_path:
        params["next"] = next_path
    response = client.get("/auth/callback", params=params)
    assert response.headers["location"] == "/trips"


def test_callback_without_code(client, auth_service):
    response = client.get("/auth/callback")
    assert response.status_code == 303
    assert response.headers["location"].startswith("/login?message=")
    auth_service.exchange_code.assert_not_called()


def test_callback_exchange_failure(client, auth_service):
    client.cookies.set(settings.code_verifier_cookie, "verifier-123")
    auth_service.exchange_code.side_effect = Exception("invalid grant")
    response = client.get("/auth/callback", params={"code": "abc"})
    assert response.headers["location"].startswith("/login?message=")


def test_logout_clears_session(client, login_as):
    login_as()
    response = client.post("/auth/logout")
    assert response.status_code == 200
    cookies = set_cookie_names(response)
    assert settings.access_token_cookie in cookies
    assert settings.refresh_token_cookie in cookies


def pkce_client(monkeypatch, verifier="verifier-xyz", url="https://accounts.example.com/o/oauth2"):
    """Client stub that stores the verifier the way supabase-auth does when a PKCE flow starts."""
    created = {}

    def new_client(cls, flow_type="implicit", storage=None):
        def sign_in_with_oauth(credentials):
            created["credentials"] = credentials
            if verifier:
                storage.set_item(f"{STORAGE_KEY}-code-verifier", verifier)
            return SimpleNamespace(provider=credentials["provider"], url=url)

        created["flow_type"] = flow_type
        return SimpleNamespace(auth=SimpleNamespace(sign_in_with_oauth=sign_in_with_oauth))

    monkeypatch.setattr(SupabaseClient, "new_client", classmethod(new_client))
    return created


def test_start_oauth_returns_url_and_verifier(monkeypatch):
    created = pkce_client(monkeypatch)

    url, verifier = AuthService().start_oauth("google", "http://localhost:3000/auth/callback")

    assert url == "https://accounts.example.com/o/oauth2"
    assert verifier == "verifier-xyz"
    assert created["flow_type"] == "pkce"
    assert created["credentials"] == {
        "provider": "google",
        "options": {"redirect_to": "http://localhost:3000/auth/callback"},
    }


def test_start_oauth_without_verifier_fails(monkeypatch):
    pkce_client(monkeypatch, verifier=None)

    with pytest.raises(HTTPException) as exc:
        AuthService().start_oauth("google", "http://localhost:3000/auth/callback")

    assert exc.value.status_code == 500
