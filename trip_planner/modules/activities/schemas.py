from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ActivityCreate(BaseModel):
    name: str = Field(min_length=1)
    category: Optional[str] = "General"
    requires_gps: bool = False


class ActivityUpdate(BaseModel):
    name: str = Field(min_length=1)
    requires_gps: bool


class ActivityResponse(BaseModel):
    id: str
    name: str
    category: Optional[str] = None
    requires_gps: bool = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
