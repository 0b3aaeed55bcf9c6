from fastapi import APIRouter, Depends
from trip_planner.core.dependencies import get_user_supabase, require_admin, UserContext
from trip_planner.modules.admin.schemas import UserStatusUpdate, AdminDashboardResponse
from trip_planner.modules.admin.service import AdminService
from trip_planner.modules.profiles.schemas import ProfileResponse
from supabase import Client
from typing import List

router = APIRouter(prefix="/admin", tags=["admin"])


def get_admin_service(supabase: Client = Depends(get_user_supabase)) -> AdminService:
    return AdminService(supabase)


@router.get("", response_model=AdminDashboardResponse)
async def dashboard(
    admin: UserContext = Depends(require_admin),
    service: AdminService = Depends(get_admin_service)
):
    return service.get_dashboard()


@router.get("/users", response_model=List[ProfileResponse])
async def list_users(
    admin: UserContext = Depends(require_admin),
    service: AdminService = Depends(get_admin_service)
):
    """All user profiles, newest first"""
    return service.list_users()


@router.patch("/users/{user_id}", response_model=ProfileResponse)
async def update_user_status(
    user_id: str,
    update: UserStatusUpdate,
    admin: UserContext = Depends(require_admin),
    service: AdminService = Depends(get_admin_service)
):
    """Approve or reject a user, optionally setting their role"""
    return service.update_user_status(user_id, update)


@router.delete("/users/{user_id}", status_code=204)
async def delete_user(
    user_id: str,
    admin: UserContext = Depends(require_admin),
    service: AdminService = Depends(get_admin_service)
):
    service.delete_user(user_id)
    return None
