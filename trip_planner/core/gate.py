"""
Edge auth gate.

Every request except probes and static files passes through `AuthGateMiddleware`
before routing. The routing decision itself is `decide()`, a pure function of
the path, the session user and the profile row; the middleware only performs
the lookups and applies the result plus any refreshed-session cookies.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

from trip_planner.config import settings
from trip_planner.core.session import CookieMutation, SessionState, resolve_session
from trip_planner.core.dependencies import (
    UserContext, fetch_profile, get_request_cache, get_user_client
)

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"
PENDING_PATH = "/pending"
HOME_PATH = "/trips"
AUTH_PREFIX = "/auth"

BLOCKED_STATUSES = ("pending", "rejected")
STATIC_SUFFIXES = (".svg", ".png", ".jpg", ".jpeg", ".gif", ".webp")


@dataclass(frozen=True)
class GateDecision:
    redirect_to: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.redirect_to is None


def is_pending_path(path: str) -> bool:
    return path == PENDING_PATH or path.startswith(PENDING_PATH + "/")


def is_public_path(path: str) -> bool:
    return path == LOGIN_PATH or path.startswith(AUTH_PREFIX) or is_pending_path(path)


def needs_profile_check(path: str) -> bool:
    return not is_pending_path(path) and not path.startswith(AUTH_PREFIX)


def is_excluded_path(path: str) -> bool:
    if path in settings.get_gate_excluded_paths():
        return True
    return path.lower().endswith(STATIC_SUFFIXES)


def decide(path: str, user: Optional[Dict[str, Any]], profile: Optional[Dict[str, Any]]) -> GateDecision:
    """Route a request given who is asking. `profile` is None when it was not looked up or not found."""
    if user is None:
        if is_public_path(path):
            return GateDecision()
        return GateDecision(redirect_to=LOGIN_PATH)

    if profile and needs_profile_check(path) and profile.get("status") in BLOCKED_STATUSES:
        return GateDecision(redirect_to=PENDING_PATH)

    if path == LOGIN_PATH:
        return GateDecision(redirect_to=HOME_PATH)

    return GateDecision()


def resolve_user_context(request: Request, session: SessionState) -> UserContext:
    """Profile row for the gate, shared with handlers through the request cache. A missing
    row lets the request through: the profile is created by a trigger and may not exist
    yet for a brand-new account."""
    profile = fetch_profile(get_user_client(request, session.access_token), session.user["id"])
    if profile is None:
        logger.warning(f"No profile for user {session.user['id']}, allowing request")
    context = UserContext(user=session.user, profile=profile, access_token=session.access_token)
    get_request_cache(request)["user_context"] = context
    return context


def _set_cookie_headers(cookies: List[CookieMutation]) -> List[Tuple[bytes, bytes]]:
    carrier = Response()
    for cookie in cookies:
        cookie.apply(carrier)
    return [(k, v) for k, v in carrier.raw_headers if k == b"set-cookie"]


class AuthGateMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http" or is_excluded_path(scope["path"]):
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        path = request.url.path
        # supabase-py is synchronous
        session = await run_in_threadpool(resolve_session, request.cookies)

        profile = None
        if session.is_authenticated and needs_profile_check(path):
            context = await run_in_threadpool(resolve_user_context, request, session)
            profile = context.profile

        # Picked up by get_user_profile so handlers do not repeat the identity lookup
        request.state.auth_session = session

        decision = decide(path, session.user, profile)
        if not decision.allowed:
            target = decision.redirect_to
            if request.url.query:
                target = f"{target}?{request.url.query}"
            response = RedirectResponse(target, status_code=307)
            for cookie in session.cookies:
                cookie.apply(response)
            await response(scope, receive, send)
            return

        if not session.cookies:
            await self.app(scope, receive, send)
            return

        cookie_headers = _set_cookie_headers(session.cookies)

        async def send_with_cookies(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"] = list(message["headers"]) + cookie_headers
            await send(message)

        await self.app(scope, receive, send_with_cookies)
