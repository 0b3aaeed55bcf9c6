from supabase import Client
from trip_planner.modules.feedback.schemas import (
    FeedbackCreate, FeedbackResponse, FeedbackDetailResponse,
    CommentCreate, CommentResponse, FeedbackStatus
)
from typing import List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

FEEDBACK_SELECT = "*, user:profiles!feedback_user_id_fkey(full_name, avatar_url)"
COMMENT_SELECT = "*, user:profiles!feedback_comments_user_id_fkey(full_name, avatar_url)"


class FeedbackService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_feedback(self) -> List[FeedbackResponse]:
        try:
            result = self.supabase.table("feedback")\
                .select(FEEDBACK_SELECT)\
                .order("created_at", desc=True)\
                .execute()
            return [FeedbackResponse(**item) for item in result.data or []]
        except Exception as e:
            logger.error(f"Error fetching feedback: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_feedback_detail(self, feedback_id: str) -> FeedbackDetailResponse:
        """Feedback item with its comments, oldest comment first"""
        try:
            result = self.supabase.table("feedback")\
                .select(FEEDBACK_SELECT)\
                .eq("id", feedback_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching feedback detail: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        if not result.data:
            raise HTTPException(status_code=404, detail="Feedback not found")

        comments = []
        try:
            comments_result = self.supabase.table("feedback_comments")\
                .select(COMMENT_SELECT)\
                .eq("feedback_id", feedback_id)\
                .order("created_at")\
                .execute()
            comments = [CommentResponse(**comment) for comment in comments_result.data or []]
        except Exception as e:
            # The item is still worth showing without its thread
            logger.error(f"Error fetching comments: {e}")

        return FeedbackDetailResponse(feedback=FeedbackResponse(**result.data[0]), comments=comments)

    def create_feedback(self, feedback_data: FeedbackCreate, user_id: str) -> FeedbackResponse:
        try:
            result = self.supabase.table("feedback").insert({
                "user_id": user_id,
                "title": feedback_data.title,
                "description": feedback_data.description,
                "type": feedback_data.type
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to submit feedback")

            return FeedbackResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating feedback: {e}")
            raise HTTPException(status_code=500, detail="Failed to submit feedback")

    def create_comment(self, feedback_id: str, comment_data: CommentCreate, user_id: str) -> CommentResponse:
        try:
            result = self.supabase.table("feedback_comments").insert({
                "feedback_id": feedback_id,
                "user_id": user_id,
                "content": comment_data.content
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to post comment")

            return CommentResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating comment: {e}")
            raise HTTPException(status_code=500, detail="Failed to post comment")

    def update_status(self, feedback_id: str, status: FeedbackStatus) -> FeedbackResponse:
        try:
            result = self.supabase.table("feedback")\
                .update({"status": status})\
                .eq("id", feedback_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Feedback not found")

            return FeedbackResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating status: {e}")
            raise HTTPException(status_code=500, detail="Failed to update status")
