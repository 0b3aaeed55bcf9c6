from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from datetime import datetime

FeedbackType = Literal["bug", "feature_request", "general"]
FeedbackStatus = Literal["open", "in_progress", "closed"]


class Author(BaseModel):
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None


class FeedbackCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    type: FeedbackType = "general"


class FeedbackStatusUpdate(BaseModel):
    status: FeedbackStatus


class CommentCreate(BaseModel):
    content: str = Field(min_length=1)


class FeedbackResponse(BaseModel):
    id: str
    user_id: str
    title: str
    description: str
    type: FeedbackType
    status: FeedbackStatus = "open"
    created_at: Optional[datetime] = None
    user: Optional[Author] = None

    class Config:
        from_attributes = True


class CommentResponse(BaseModel):
    id: str
    feedback_id: str
    user_id: str
    content: str
    created_at: Optional[datetime] = None
    user: Optional[Author] = None

    class Config:
        from_attributes = True


class FeedbackDetailResponse(BaseModel):
    feedback: FeedbackResponse
    comments: List[CommentResponse]
