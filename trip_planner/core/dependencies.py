"""
Core dependencies for route protection and the per-request user context
"""

from dataclasses import dataclass
from fastapi import Depends, HTTPException, Request, status
from trip_planner.core.session import SessionState, resolve_session
from trip_planner.database.supabase_client import SupabaseClient
from supabase import Client
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserContext:
    user: Optional[Dict[str, Any]] = None
    profile: Optional[Dict[str, Any]] = None
    access_token: Optional[str] = None

    @property
    def user_id(self) -> Optional[str]:
        return self.user["id"] if self.user else None

    @property
    def is_admin(self) -> bool:
        return bool(self.profile) and self.profile.get("role") == "admin"


def get_request_cache(request: Request) -> Dict[str, Any]:
    """Return request-scoped cache for the session, user client and resolved context."""
    if not hasattr(request.state, "access_cache"):
        request.state.access_cache = {}
    return request.state.access_cache


def get_session(request: Request) -> SessionState:
    """Session resolved by the auth gate, or resolved here for paths the gate skips."""
    session = getattr(request.state, "auth_session", None)
    if session is None:
        session = resolve_session(request.cookies)
        request.state.auth_session = session
    return session


def get_user_client(request: Request, access_token: str) -> Client:
    cache = get_request_cache(request)
    if "user_client" not in cache:
        cache["user_client"] = SupabaseClient.for_user(access_token)
    return cache["user_client"]


def fetch_profile(supabase: Client, user_id: str) -> Optional[Dict[str, Any]]:
    """Full profile row for a user, None when missing"""
    try:
        result = supabase.table("profiles")\
            .select("*")\
            .eq("id", user_id)\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None
    except Exception as e:
        logger.error(f"Error fetching profile for {user_id}: {e}")
        return None


def get_user_profile(request: Request) -> UserContext:
    """Current user and profile. One identity lookup and one profile lookup per request at most."""
    cache = get_request_cache(request)
    if "user_context" in cache:
        return cache["user_context"]

    session = get_session(request)
    if not session.is_authenticated:
        context = UserContext()
    else:
        user_client = get_user_client(request, session.access_token)
        context = UserContext(
            user=session.user,
            profile=fetch_profile(user_client, session.user["id"]),
            access_token=session.access_token,
        )
    cache["user_context"] = context
    return context


def require_user(context: UserContext = Depends(get_user_profile)) -> UserContext:
    if context.user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized"
        )
    return context


def require_admin(context: UserContext = Depends(require_user)) -> UserContext:
    """Admin role is read from the profile row; RLS enforces the same rule in the store"""
    if not context.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Unauthorized: Admin access required"
        )
    return context


def get_user_supabase(
    request: Request,
    context: UserContext = Depends(require_user)
) -> Client:
    """Client bound to the caller's JWT"""
    return get_user_client(request, context.access_token)
