from supabase import Client
from trip_planner.modules.profiles.schemas import ProfileUpdate, ProfileResponse, PendingStatusResponse
from typing import Any, Dict, Optional
from datetime import datetime, timezone
from fastapi import HTTPException

PENDING_MESSAGES = {
    "pending": (
        "Your account has been created and is currently awaiting administrator approval. "
        "You will be able to access the application once an admin reviews your request."
    ),
    "rejected": "Your account request was not approved. Contact an administrator if you think this is a mistake.",
    "approved": "Your account is approved.",
}


def compose_full_name(first_name: Optional[str], last_name: Optional[str]) -> str:
    return f"{first_name or ''} {last_name or ''}".strip()


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def update_profile(
        self,
        user_id: str,
        profile_data: ProfileUpdate,
        current: Optional[Dict[str, Any]] = None
    ) -> ProfileResponse:
        """Update personal fields. status and role are never written from here."""
        try:
            current = current or {}
            update_data = {"updated_at": datetime.now(timezone.utc).isoformat()}
            for field, value in profile_data.model_dump(exclude_none=True).items():
                update_data[field] = value

            if profile_data.first_name is not None or profile_data.last_name is not None:
                update_data["full_name"] = compose_full_name(
                    update_data.get("first_name", current.get("first_name")),
                    update_data.get("last_name", current.get("last_name")),
                )

            result = self.supabase.table("profiles")\
                .update(update_data)\
                .eq("id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Profile not found")

            return ProfileResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))


def pending_status(user: Optional[Dict[str, Any]], profile: Optional[Dict[str, Any]]) -> PendingStatusResponse:
    if user is None:
        return PendingStatusResponse(message="Sign in to continue.")
    status = profile.get("status") if profile else "pending"
    return PendingStatusResponse(
        status=status,
        email=user.get("email"),
        message=PENDING_MESSAGES.get(status, PENDING_MESSAGES["pending"]),
    )
