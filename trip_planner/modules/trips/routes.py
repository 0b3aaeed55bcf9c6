from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse
from trip_planner.core.dependencies import get_user_supabase, require_user, UserContext
from trip_planner.modules.activities.service import ActivityService
from trip_planner.modules.trips.schemas import (
    TripCreate, TripUpdate, TripResponse, TripListResponse, TripFormResponse,
    TripDetailResponse, ParticipantResponse, RSVPUpdate, ActivityParticipationResult
)
from trip_planner.modules.trips.service import TripService
from supabase import Client
from typing import Dict, Any

router = APIRouter(prefix="/trips", tags=["trips"])


def get_trip_service(supabase: Client = Depends(get_user_supabase)) -> TripService:
    return TripService(supabase)


def get_activity_service(supabase: Client = Depends(get_user_supabase)) -> ActivityService:
    return ActivityService(supabase)


def check_trip_owner(trip: Dict[str, Any], context: UserContext) -> None:
    if trip["owner_id"] != context.user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the trip owner can change this trip"
        )


@router.get("", response_model=TripListResponse)
async def list_trips(
    context: UserContext = Depends(require_user),
    service: TripService = Depends(get_trip_service)
):
    """Trips the current user is organizing or attending"""
    return TripListResponse(
        trips=service.list_user_trips(context.user_id),
        current_user_id=context.user_id,
        is_admin=context.is_admin
    )


@router.post("", response_model=TripResponse, status_code=201)
async def create_trip(
    trip_data: TripCreate,
    context: UserContext = Depends(require_user),
    service: TripService = Depends(get_trip_service)
):
    return service.create_trip(trip_data, context.user_id)


@router.get("/new", response_model=TripFormResponse)
async def new_trip_form(
    context: UserContext = Depends(require_user),
    activities: ActivityService = Depends(get_activity_service)
):
    """Data for the empty trip form"""
    return TripFormResponse(activities=activities.list_activities())


@router.get("/{trip_id}", response_model=TripDetailResponse)
async def get_trip(
    trip_id: str,
    context: UserContext = Depends(require_user),
    service: TripService = Depends(get_trip_service)
):
    return service.get_trip_detail(trip_id, context.user_id)


@router.get("/{trip_id}/edit", response_model=TripFormResponse)
async def edit_trip_form(
    trip_id: str,
    context: UserContext = Depends(require_user),
    service: TripService = Depends(get_trip_service),
    activities: ActivityService = Depends(get_activity_service)
):
    """Owner-only edit form; everyone else is sent to the trip page"""
    trip = service.get_trip_or_404(trip_id)
    if trip["owner_id"] != context.user_id:
        return RedirectResponse(f"/trips/{trip_id}", status_code=307)
    return TripFormResponse(
        trip=TripResponse(**trip),
        activities=activities.list_activities(),
        selected_activity_ids=service.get_trip_activity_ids(trip_id)
    )


@router.put("/{trip_id}", response_model=TripResponse)
async def update_trip(
    trip_id: str,
    trip_data: TripUpdate,
    context: UserContext = Depends(require_user),
    service: TripService = Depends(get_trip_service)
):
    check_trip_owner(service.get_trip_or_404(trip_id), context)
    return service.update_trip(trip_id, trip_data)


@router.delete("/{trip_id}", status_code=204)
async def delete_trip(
    trip_id: str,
    context: UserContext = Depends(require_user),
    service: TripService = Depends(get_trip_service)
):
    """Delete a trip (owner or admin)"""
    trip = service.get_trip_or_404(trip_id)
    if not context.is_admin:
        check_trip_owner(trip, context)
    service.delete_trip(trip_id)
    return None


@router.put("/{trip_id}/rsvp", response_model=ParticipantResponse)
async def update_rsvp(
    trip_id: str,
    rsvp: RSVPUpdate,
    context: UserContext = Depends(require_user),
    service: TripService = Depends(get_trip_service)
):
    service.get_trip_or_404(trip_id)
    return service.upsert_rsvp(trip_id, context.user_id, rsvp)


@router.post("/{trip_id}/activities/join-all", response_model=ActivityParticipationResult)
async def join_all_activities(
    trip_id: str,
    context: UserContext = Depends(require_user),
    service: TripService = Depends(get_trip_service)
):
    return service.join_all_activities(trip_id, context.user_id)


@router.post("/{trip_id}/activities/leave-all", response_model=ActivityParticipationResult)
async def leave_all_activities(
    trip_id: str,
    context: UserContext = Depends(require_user),
    service: TripService = Depends(get_trip_service)
):
    return service.leave_all_activities(trip_id, context.user_id)


@router.post("/{trip_id}/activities/{activity_id}/toggle", response_model=ActivityParticipationResult)
async def toggle_activity(
    trip_id: str,
    activity_id: str,
    context: UserContext = Depends(require_user),
    service: TripService = Depends(get_trip_service)
):
    return service.toggle_activity(trip_id, activity_id, context.user_id)
