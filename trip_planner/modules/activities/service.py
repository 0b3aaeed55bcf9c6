from supabase import Client
from trip_planner.modules.activities.schemas import ActivityCreate, ActivityUpdate, ActivityResponse
from typing import List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class ActivityService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_activities(self) -> List[ActivityResponse]:
        """Full catalog, ordered by name"""
        try:
            result = self.supabase.table("activities")\
                .select("*")\
                .order("name")\
                .execute()
            return [ActivityResponse(**activity) for activity in result.data or []]
        except Exception as e:
            logger.error(f"Error fetching activities: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def create_activity(self, activity_data: ActivityCreate) -> ActivityResponse:
        try:
            result = self.supabase.table("activities").insert({
                "name": activity_data.name,
                "category": activity_data.category or "General",
                "requires_gps": activity_data.requires_gps
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create activity")

            return ActivityResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_activity(self, activity_id: str, activity_data: ActivityUpdate) -> ActivityResponse:
        """Rename an activity or flip its GPS requirement"""
        try:
            result = self.supabase.table("activities")\
                .update({"name": activity_data.name, "requires_gps": activity_data.requires_gps})\
                .eq("id", activity_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Activity not found")

            return ActivityResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_activity(self, activity_id: str) -> bool:
        try:
            result = self.supabase.table("activities")\
                .delete()\
                .eq("id", activity_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Activity not found")

            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
