from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse, RedirectResponse
from trip_planner.config import settings
from trip_planner.core.rate_limit import limiter
from trip_planner.core.session import CookieMutation, clear_session_cookies, session_cookies
from trip_planner.modules.auth.schemas import LoginRequest, LoginPageResponse, OAuthProvider
from trip_planner.modules.auth.service import AuthService
from typing import Optional, get_args
import logging

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

LOGIN_FAILED_URL = "/login?message=Could not authenticate user"
DEFAULT_NEXT = "/trips"


def get_auth_service() -> AuthService:
    return AuthService()


def _callback_url() -> str:
    return f"{settings.site_url.rstrip('/')}/auth/callback"


def _safe_next(next_path: Optional[str]) -> str:
    # Only same-site relative paths
    if next_path and next_path.startswith("/") and not next_path.startswith("//"):
        return next_path
    return DEFAULT_NEXT


@router.get("/login", response_model=LoginPageResponse)
async def login_page(message: Optional[str] = None):
    """Available sign-in providers, plus any message from a failed attempt"""
    return LoginPageResponse(providers=list(get_args(OAuthProvider)), message=message)


@router.post("/login")
@limiter.limit(settings.login_rate_limit)
async def login(
    request: Request,
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Start OAuth sign-in and redirect to the provider"""
    try:
        url, code_verifier = service.start_oauth(login_data.provider, _callback_url())
    except Exception as e:
        logger.error(f"Login error: {e}")
        return RedirectResponse(LOGIN_FAILED_URL, status_code=303)

    response = RedirectResponse(url, status_code=303)
    CookieMutation(settings.code_verifier_cookie, code_verifier).apply(response)
    return response


@router.get("/auth/callback")
@limiter.limit(settings.login_rate_limit)
async def auth_callback(
    request: Request,
    code: Optional[str] = None,
    next_path: Optional[str] = Query(None, alias="next"),
    service: AuthService = Depends(get_auth_service)
):
    """OAuth redirect target: store the session in cookies"""
    code_verifier = request.cookies.get(settings.code_verifier_cookie)
    if not code or not code_verifier:
        return RedirectResponse(LOGIN_FAILED_URL, status_code=303)

    try:
        session = service.exchange_code(code, code_verifier, _callback_url())
    except Exception as e:
        logger.error(f"Auth callback error: {e}")
        return RedirectResponse(LOGIN_FAILED_URL, status_code=303)

    response = RedirectResponse(_safe_next(next_path), status_code=303)
    for cookie in session_cookies(session):
        cookie.apply(response)
    CookieMutation(settings.code_verifier_cookie, delete=True).apply(response)
    return response


@router.post("/auth/logout", status_code=200)
async def logout():
    """Logout by dropping the session cookies; the access token expires on its own"""
    response = JSONResponse({"message": "Logged out successfully"})
    for cookie in clear_session_cookies():
        cookie.apply(response)
    return response
