from fastapi import APIRouter, Depends
from trip_planner.core.dependencies import get_user_supabase, require_admin, require_user, UserContext
from trip_planner.modules.feedback.schemas import (
    FeedbackCreate, FeedbackResponse, FeedbackDetailResponse,
    FeedbackStatusUpdate, CommentCreate, CommentResponse
)
from trip_planner.modules.feedback.service import FeedbackService
from supabase import Client
from typing import List

router = APIRouter(prefix="/feedback", tags=["feedback"])


def get_feedback_service(supabase: Client = Depends(get_user_supabase)) -> FeedbackService:
    return FeedbackService(supabase)


@router.get("", response_model=List[FeedbackResponse])
async def list_feedback(
    context: UserContext = Depends(require_user),
    service: FeedbackService = Depends(get_feedback_service)
):
    """All feedback, newest first"""
    return service.list_feedback()


@router.post("", response_model=FeedbackResponse, status_code=201)
async def create_feedback(
    feedback_data: FeedbackCreate,
    context: UserContext = Depends(require_user),
    service: FeedbackService = Depends(get_feedback_service)
):
    return service.create_feedback(feedback_data, context.user_id)


@router.get("/{feedback_id}", response_model=FeedbackDetailResponse)
async def get_feedback(
    feedback_id: str,
    context: UserContext = Depends(require_user),
    service: FeedbackService = Depends(get_feedback_service)
):
    return service.get_feedback_detail(feedback_id)


@router.post("/{feedback_id}/comments", response_model=CommentResponse, status_code=201)
async def create_comment(
    feedback_id: str,
    comment_data: CommentCreate,
    context: UserContext = Depends(require_user),
    service: FeedbackService = Depends(get_feedback_service)
):
    return service.create_comment(feedback_id, comment_data, context.user_id)


@router.patch("/{feedback_id}/status", response_model=FeedbackResponse)
async def update_feedback_status(
    feedback_id: str,
    update: FeedbackStatusUpdate,
    admin: UserContext = Depends(require_admin),
    service: FeedbackService = Depends(get_feedback_service)
):
    """Move feedback through open / in_progress / closed (admin only)"""
    return service.update_status(feedback_id, update.status)
