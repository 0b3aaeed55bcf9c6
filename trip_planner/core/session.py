"""
Cookie-backed sessions.

The browser holds the access and refresh tokens issued by Supabase Auth in two
cookies. `resolve_session` verifies the access token and, when it is rejected,
refreshes once with the refresh token. It never writes to a response itself:
any cookie changes come back as `CookieMutation`s for the caller to apply.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from starlette.responses import Response
from supabase import Client

from trip_planner.config import settings
from trip_planner.database.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CookieMutation:
    name: str
    value: str = ""
    delete: bool = False

    def apply(self, response: Response) -> None:
        if self.delete:
            response.delete_cookie(self.name, path="/")
            return
        response.set_cookie(
            self.name,
            self.value,
            max_age=settings.cookie_max_age,
            httponly=True,
            secure=settings.cookie_secure,
            samesite="lax",
            path="/",
        )


@dataclass
class SessionState:
    user: Optional[Dict[str, Any]] = None
    access_token: Optional[str] = None
    cookies: List[CookieMutation] = field(default_factory=list)

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


def user_to_dict(user) -> Dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "user_metadata": user.user_metadata or {},
        "app_metadata": user.app_metadata or {},
        "created_at": user.created_at,
    }


def session_cookies(session) -> List[CookieMutation]:
    return [
        CookieMutation(settings.access_token_cookie, session.access_token),
        CookieMutation(settings.refresh_token_cookie, session.refresh_token),
    ]


def clear_session_cookies() -> List[CookieMutation]:
    return [
        CookieMutation(settings.access_token_cookie, delete=True),
        CookieMutation(settings.refresh_token_cookie, delete=True),
    ]


def _refresh(refresh_token: str) -> SessionState:
    try:
        response = SupabaseClient.new_client().auth.refresh_session(refresh_token)
    except Exception as e:
        logger.info(f"Session refresh failed: {e}")
        return SessionState(cookies=clear_session_cookies())

    if not response.session or not response.user:
        return SessionState(cookies=clear_session_cookies())

    return SessionState(
        user=user_to_dict(response.user),
        access_token=response.session.access_token,
        cookies=session_cookies(response.session),
    )


def resolve_session(cookies: Mapping[str, str], supabase: Optional[Client] = None) -> SessionState:
    """Resolve the session user from request cookies. The shared client is only created when a token needs checking."""
    access_token = cookies.get(settings.access_token_cookie)
    refresh_token = cookies.get(settings.refresh_token_cookie)

    if not access_token and not refresh_token:
        return SessionState()

    if access_token:
        try:
            client = supabase or SupabaseClient.get_client()
            response = client.auth.get_user(jwt=access_token)
            if response and response.user:
                return SessionState(user=user_to_dict(response.user), access_token=access_token)
        except Exception as e:
            # Expired tokens land here too; fall through to the refresh token
            logger.debug(f"Access token rejected: {e}")

    if refresh_token:
        return _refresh(refresh_token)

    return SessionState(cookies=clear_session_cookies())
