from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from datetime import date, datetime

from trip_planner.modules.activities.schemas import ActivityResponse


class Guest(BaseModel):
    name: str
    age: Optional[str] = None


class TripCreate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_public: bool = False
    locations: List[str] = []
    activity_ids: List[str] = []


class TripUpdate(TripCreate):
    pass


class TripResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    owner_id: str
    is_public: bool = False
    locations: List[str] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TripListResponse(BaseModel):
    trips: List[dict]  # rows from get_user_trips, untouched
    current_user_id: str
    is_admin: bool = False


class TripFormResponse(BaseModel):
    trip: Optional[TripResponse] = None
    activities: List[ActivityResponse]
    selected_activity_ids: List[str] = []


class ParticipantResponse(BaseModel):
    trip_id: str
    user_id: str
    status: str = "going"
    role: str = "member"
    arrival_date: Optional[date] = None
    departure_date: Optional[date] = None
    guests: List[Guest] = []
    profile: Optional[dict] = None  # first_name, last_name, full_name, avatar_url, username

    class Config:
        from_attributes = True


class TripActivityView(BaseModel):
    id: str
    name: str
    category: Optional[str] = None
    requires_gps: bool = False
    participant_ids: List[str] = []
    joined: bool = False


class TripDetailResponse(BaseModel):
    trip: TripResponse
    owner: Optional[dict] = None  # full_name, avatar_url
    is_owner: bool
    going: List[ParticipantResponse]
    declined: List[ParticipantResponse]
    total_confirmed: int
    my_participation: Optional[ParticipantResponse] = None
    activities: List[TripActivityView]
    joined_count: int
    total_count: int


class RSVPUpdate(BaseModel):
    status: Literal["going", "declined"] = "going"
    arrival_date: Optional[date] = None
    departure_date: Optional[date] = None
    guests: List[Guest] = []


class ActivityParticipationResult(BaseModel):
    success: bool
    message: Optional[str] = None
    changed: int = 0  # rows inserted or deleted
    joined: Optional[bool] = None  # set by single-activity toggles
