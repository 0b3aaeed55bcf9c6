from pydantic import BaseModel
from typing import Dict, List, Literal, Optional

from trip_planner.modules.profiles.schemas import ProfileRole


class UserStatusUpdate(BaseModel):
    status: Literal["approved", "rejected"]
    role: Optional[ProfileRole] = "user"


class AdminSection(BaseModel):
    title: str
    path: str
    description: str


class AdminDashboardResponse(BaseModel):
    sections: List[AdminSection]
    users_by_status: Dict[str, int]
    activity_count: int
