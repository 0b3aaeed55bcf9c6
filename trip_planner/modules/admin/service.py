from supabase import Client
from trip_planner.modules.admin.schemas import UserStatusUpdate, AdminDashboardResponse, AdminSection
from trip_planner.modules.profiles.schemas import ProfileResponse
from typing import List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

SECTIONS = [
    AdminSection(
        title="Manage Users",
        path="/admin/users",
        description="View users, approve registrations, and manage roles."
    ),
    AdminSection(
        title="Manage Activities",
        path="/admin/activities",
        description="Curate the global list of activities available for trips."
    ),
]


class AdminService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_users(self) -> List[ProfileResponse]:
        """All profiles, newest first"""
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .order("created_at", desc=True)\
                .execute()
            return [ProfileResponse(**profile) for profile in result.data or []]
        except Exception as e:
            logger.error(f"Error fetching users: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def update_user_status(self, user_id: str, update: UserStatusUpdate) -> ProfileResponse:
        try:
            update_data = {"status": update.status}
            if update.role:
                update_data["role"] = update.role

            result = self.supabase.table("profiles")\
                .update(update_data)\
                .eq("id", user_id)\
                .execute()

            if not result.data:
                logger.warning(f"No rows updated for user: {user_id}")
                raise HTTPException(status_code=404, detail="User not found or no changes applied")

            return ProfileResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Database update error: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def delete_user(self, user_id: str) -> bool:
        """Delete the profile row. The auth user is left to the identity provider."""
        try:
            result = self.supabase.table("profiles")\
                .delete()\
                .eq("id", user_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="User not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_dashboard(self) -> AdminDashboardResponse:
        try:
            profiles = self.supabase.table("profiles")\
                .select("status")\
                .execute()
            activities = self.supabase.table("activities")\
                .select("id")\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        users_by_status = {"pending": 0, "approved": 0, "rejected": 0}
        for row in profiles.data or []:
            status = row.get("status") or "pending"
            users_by_status[status] = users_by_status.get(status, 0) + 1

        return AdminDashboardResponse(
            sections=SECTIONS,
            users_by_status=users_by_status,
            activity_count=len(activities.data or [])
        )
