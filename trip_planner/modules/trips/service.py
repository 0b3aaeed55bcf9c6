from supabase import Client
from trip_planner.modules.trips.schemas import (
    TripCreate, TripUpdate, TripResponse, TripDetailResponse, TripActivityView,
    ParticipantResponse, RSVPUpdate, ActivityParticipationResult
)
from typing import Any, Dict, List, Optional
from datetime import datetime, timezone
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


def _iso(value) -> Optional[str]:
    return value.isoformat() if value else None


class TripService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_user_trips(self, user_id: str) -> List[Dict[str, Any]]:
        """Trips the user owns or takes part in, as returned by get_user_trips"""
        try:
            result = self.supabase.rpc("get_user_trips", {"query_user_id": user_id}).execute()
            return result.data or []
        except Exception as e:
            logger.error(f"Error fetching trips for {user_id}: {e}")
            return []

    def get_trip(self, trip_id: str) -> Optional[Dict[str, Any]]:
        try:
            result = self.supabase.table("trips")\
                .select("*")\
                .eq("id", trip_id)\
                .limit(1)\
                .execute()
            return result.data[0] if result.data else None
        except Exception as e:
            logger.error(f"Error fetching trip {trip_id}: {e}")
            return None

    def get_trip_or_404(self, trip_id: str) -> Dict[str, Any]:
        trip = self.get_trip(trip_id)
        if not trip:
            raise HTTPException(status_code=404, detail="Trip not found")
        return trip

    def get_trip_activity_ids(self, trip_id: str) -> List[str]:
        result = self.supabase.table("trip_activities")\
            .select("activity_id")\
            .eq("trip_id", trip_id)\
            .execute()
        return [row["activity_id"] for row in result.data or []]

    def set_trip_activities(self, trip_id: str, activity_ids: List[str]) -> None:
        """Replace the set of catalog activities offered on a trip"""
        self.supabase.table("trip_activities")\
            .delete()\
            .eq("trip_id", trip_id)\
            .execute()
        unique_ids = list(dict.fromkeys(activity_ids))
        if unique_ids:
            self.supabase.table("trip_activities").insert([
                {"trip_id": trip_id, "activity_id": activity_id} for activity_id in unique_ids
            ]).execute()

    def _trip_payload(self, trip_data: TripCreate) -> Dict[str, Any]:
        return {
            "name": trip_data.name,
            "description": trip_data.description,
            "start_date": _iso(trip_data.start_date),
            "end_date": _iso(trip_data.end_date),
            "is_public": trip_data.is_public,
            "locations": trip_data.locations,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }

    def create_trip(self, trip_data: TripCreate, owner_id: str) -> TripResponse:
        """Create a trip, attach its activities and add the owner as a participant"""
        try:
            payload = self._trip_payload(trip_data)
            payload["owner_id"] = owner_id
            result = self.supabase.table("trips").insert(payload).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create trip")

            trip = result.data[0]
            self.set_trip_activities(trip["id"], trip_data.activity_ids)

            try:
                self.supabase.table("trip_participants").insert({
                    "trip_id": trip["id"],
                    "user_id": owner_id,
                    "status": "going",
                    "role": "owner"
                }).execute()
            except Exception as e:
                logger.error(f"Error adding owner as participant on trip {trip['id']}: {e}")

            return TripResponse(**trip)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error saving trip: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def update_trip(self, trip_id: str, trip_data: TripUpdate) -> TripResponse:
        try:
            result = self.supabase.table("trips")\
                .update(self._trip_payload(trip_data))\
                .eq("id", trip_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Trip not found")

            self.set_trip_activities(trip_id, trip_data.activity_ids)
            return TripResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error saving trip {trip_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def delete_trip(self, trip_id: str) -> bool:
        try:
            self.supabase.table("trips")\
                .delete()\
                .eq("id", trip_id)\
                .execute()
            return True
        except Exception as e:
            logger.error(f"Error deleting trip {trip_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to delete trip")

    def _profiles_by_id(self, user_ids: List[str], columns: str) -> Dict[str, Dict[str, Any]]:
        if not user_ids:
            return {}
        result = self.supabase.table("profiles")\
            .select(f"id, {columns}")\
            .in_("id", user_ids)\
            .execute()
        return {row["id"]: row for row in result.data or []}

    def list_participants(self, trip_id: str) -> List[ParticipantResponse]:
        result = self.supabase.table("trip_participants")\
            .select("*")\
            .eq("trip_id", trip_id)\
            .execute()
        rows = result.data or []
        profiles = self._profiles_by_id(
            [row["user_id"] for row in rows],
            "first_name, last_name, full_name, avatar_url, username"
        )
        participants = []
        for row in rows:
            participant = dict(row)
            participant["guests"] = row.get("guests") or []
            participant["profile"] = profiles.get(row["user_id"])
            participants.append(ParticipantResponse(**participant))
        return participants

    def list_trip_activities(self, trip_id: str, user_id: str) -> List[TripActivityView]:
        """Activities offered on a trip, with who joined each"""
        activity_ids = self.get_trip_activity_ids(trip_id)
        if not activity_ids:
            return []

        activities_result = self.supabase.table("activities")\
            .select("id, name, category, requires_gps")\
            .in_("id", activity_ids)\
            .order("name")\
            .execute()

        joins_result = self.supabase.table("trip_activity_participants")\
            .select("activity_id, user_id")\
            .eq("trip_id", trip_id)\
            .execute()

        participants: Dict[str, List[str]] = {}
        for row in joins_result.data or []:
            participants.setdefault(row["activity_id"], []).append(row["user_id"])

        views = []
        for activity in activities_result.data or []:
            ids = participants.get(activity["id"], [])
            views.append(TripActivityView(
                **activity,
                participant_ids=ids,
                joined=user_id in ids
            ))
        return views

    def get_trip_detail(self, trip_id: str, user_id: str) -> TripDetailResponse:
        trip = self.get_trip_or_404(trip_id)
        try:
            owner = self._profiles_by_id([trip["owner_id"]], "full_name, avatar_url").get(trip["owner_id"])
            participants = self.list_participants(trip_id)
            activities = self.list_trip_activities(trip_id, user_id)
        except Exception as e:
            logger.error(f"Error loading trip {trip_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        going = [p for p in participants if p.status == "going"]
        declined = [p for p in participants if p.status == "declined"]
        mine = next((p for p in participants if p.user_id == user_id), None)

        return TripDetailResponse(
            trip=TripResponse(**trip),
            owner=owner,
            is_owner=trip["owner_id"] == user_id,
            going=going,
            declined=declined,
            # Each confirmed participant counts once plus their guests
            total_confirmed=sum(1 + len(p.guests) for p in going),
            my_participation=mine,
            activities=activities,
            joined_count=sum(1 for a in activities if a.joined),
            total_count=len(activities),
        )

    def upsert_rsvp(self, trip_id: str, user_id: str, rsvp: RSVPUpdate) -> ParticipantResponse:
        """Create or update the caller's participation. Role is left to the column default."""
        try:
            result = self.supabase.table("trip_participants").upsert({
                "trip_id": trip_id,
                "user_id": user_id,
                "status": rsvp.status,
                "arrival_date": _iso(rsvp.arrival_date),
                "departure_date": _iso(rsvp.departure_date),
                "guests": [guest.model_dump() for guest in rsvp.guests],
            }, on_conflict="trip_id,user_id").execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to update RSVP")

            return ParticipantResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def _joined_activity_ids(self, trip_id: str, user_id: str) -> List[str]:
        result = self.supabase.table("trip_activity_participants")\
            .select("activity_id")\
            .eq("trip_id", trip_id)\
            .eq("user_id", user_id)\
            .execute()
        return [row["activity_id"] for row in result.data or []]

    def join_all_activities(self, trip_id: str, user_id: str) -> ActivityParticipationResult:
        """Join every trip activity the user has not joined yet. Safe to repeat."""
        try:
            joined = set(self._joined_activity_ids(trip_id, user_id))
            missing = [a for a in self.get_trip_activity_ids(trip_id) if a not in joined]
            if missing:
                self.supabase.table("trip_activity_participants").upsert(
                    [{"trip_id": trip_id, "activity_id": a, "user_id": user_id} for a in missing],
                    on_conflict="trip_id,activity_id,user_id",
                    ignore_duplicates=True
                ).execute()
            return ActivityParticipationResult(success=True, changed=len(missing))
        except Exception as e:
            logger.error(f"Error joining all activities on trip {trip_id}: {e}")
            return ActivityParticipationResult(success=False, message="Failed to join all activities")

    def leave_all_activities(self, trip_id: str, user_id: str) -> ActivityParticipationResult:
        try:
            result = self.supabase.table("trip_activity_participants")\
                .delete()\
                .eq("trip_id", trip_id)\
                .eq("user_id", user_id)\
                .execute()
            return ActivityParticipationResult(success=True, changed=len(result.data or []))
        except Exception as e:
            logger.error(f"Error leaving all activities on trip {trip_id}: {e}")
            return ActivityParticipationResult(success=False, message="Failed to unjoin all activities")

    def toggle_activity(self, trip_id: str, activity_id: str, user_id: str) -> ActivityParticipationResult:
        """Join one activity, or leave it when already joined"""
        try:
            if activity_id not in self.get_trip_activity_ids(trip_id):
                return ActivityParticipationResult(success=False, message="Activity is not part of this trip")

            if activity_id in self._joined_activity_ids(trip_id, user_id):
                self.supabase.table("trip_activity_participants")\
                    .delete()\
                    .eq("trip_id", trip_id)\
                    .eq("activity_id", activity_id)\
                    .eq("user_id", user_id)\
                    .execute()
                return ActivityParticipationResult(success=True, changed=1, joined=False)

            self.supabase.table("trip_activity_participants").upsert(
                {"trip_id": trip_id, "activity_id": activity_id, "user_id": user_id},
                on_conflict="trip_id,activity_id,user_id",
                ignore_duplicates=True
            ).execute()
            return ActivityParticipationResult(success=True, changed=1, joined=True)
        except Exception as e:
            logger.error(f"Error updating participation on trip {trip_id}: {e}")
            return ActivityParticipationResult(success=False, message="Failed to update participation")
