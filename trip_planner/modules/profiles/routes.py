from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse
from trip_planner.core.dependencies import get_user_profile, get_user_supabase, require_user, UserContext
from trip_planner.core.session import clear_session_cookies
from trip_planner.modules.profiles.schemas import (
    ProfileUpdate, ProfileResponse, ProfilePageResponse, PendingStatusResponse
)
from trip_planner.modules.profiles.service import ProfileService, pending_status
from supabase import Client

router = APIRouter(tags=["profiles"])


def get_profile_service(supabase: Client = Depends(get_user_supabase)) -> ProfileService:
    return ProfileService(supabase)


@router.get("/profile", response_model=ProfilePageResponse)
async def get_profile(context: UserContext = Depends(require_user)):
    """Current user and their profile row"""
    return ProfilePageResponse(user=context.user, profile=context.profile)


@router.put("/profile", response_model=ProfileResponse)
async def update_profile(
    profile_data: ProfileUpdate,
    context: UserContext = Depends(require_user),
    service: ProfileService = Depends(get_profile_service)
):
    return service.update_profile(context.user_id, profile_data, context.profile)


@router.get("/pending", response_model=PendingStatusResponse)
async def pending(context: UserContext = Depends(get_user_profile)):
    """Where pending and rejected accounts are held"""
    return pending_status(context.user, context.profile)


@router.post("/pending/sign-out")
async def pending_sign_out():
    response = RedirectResponse("/login", status_code=303)
    for cookie in clear_session_cookies():
        cookie.apply(response)
    return response
