from pydantic import BaseModel
from typing import Optional, Literal
from datetime import datetime

ProfileStatus = Literal["pending", "approved", "rejected"]
ProfileRole = Literal["user", "admin"]


class ProfileUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    username: Optional[str] = None
    phone_number: Optional[str] = None
    avatar_url: Optional[str] = None
    home_airport: Optional[str] = None


class ProfileResponse(BaseModel):
    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    full_name: Optional[str] = None
    username: Optional[str] = None
    phone_number: Optional[str] = None
    avatar_url: Optional[str] = None
    home_airport: Optional[str] = None
    status: ProfileStatus = "pending"
    role: ProfileRole = "user"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProfilePageResponse(BaseModel):
    user: dict
    profile: Optional[ProfileResponse] = None


class PendingStatusResponse(BaseModel):
    status: Optional[str] = None
    email: Optional[str] = None
    message: str
