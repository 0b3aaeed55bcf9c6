from fastapi import APIRouter, Depends
from trip_planner.core.dependencies import get_user_supabase, require_admin, UserContext
from trip_planner.modules.activities.schemas import ActivityCreate, ActivityUpdate, ActivityResponse
from trip_planner.modules.activities.service import ActivityService
from supabase import Client
from typing import List

router = APIRouter(prefix="/admin/activities", tags=["activities"])


def get_activity_service(supabase: Client = Depends(get_user_supabase)) -> ActivityService:
    return ActivityService(supabase)


@router.get("", response_model=List[ActivityResponse])
async def list_activities(
    admin: UserContext = Depends(require_admin),
    service: ActivityService = Depends(get_activity_service)
):
    """Activity catalog (admin only)"""
    return service.list_activities()


@router.post("", response_model=ActivityResponse, status_code=201)
async def create_activity(
    activity_data: ActivityCreate,
    admin: UserContext = Depends(require_admin),
    service: ActivityService = Depends(get_activity_service)
):
    return service.create_activity(activity_data)


@router.put("/{activity_id}", response_model=ActivityResponse)
async def update_activity(
    activity_id: str,
    activity_data: ActivityUpdate,
    admin: UserContext = Depends(require_admin),
    service: ActivityService = Depends(get_activity_service)
):
    return service.update_activity(activity_id, activity_data)


@router.delete("/{activity_id}", status_code=204)
async def delete_activity(
    activity_id: str,
    admin: UserContext = Depends(require_admin),
    service: ActivityService = Depends(get_activity_service)
):
    service.delete_activity(activity_id)
    return None
