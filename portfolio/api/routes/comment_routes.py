"""Public comment API routes -- guestbook submit and approved listing."""
import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from portfolio.domain.comment import MAX_CONTENT_LENGTH
from portfolio.infrastructure.audit import log_event as audit_log

router = APIRouter(prefix="/api", tags=["comments"])

_log = logging.getLogger("portfolio.comments")

_comment_repo = None


def init_comment_routes(comment_repo):
    global _comment_repo
    _comment_repo = comment_repo


class CreateCommentRequest(BaseModel):
    content: str = Field(..., min_length=1, max_length=MAX_CONTENT_LENGTH)


@router.get("/comments")
def api_list_comments():
    """Approved comments, newest first."""
    try:
        return [c.to_dict() for c in _comment_repo.get_approved()]
    except Exception as exc:
        _log.error("Failed to fetch comments: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to fetch comments")


@router.post("/comments", status_code=201)
def api_create_comment(req: CreateCommentRequest):
    """Store a new comment. It stays hidden until an admin approves it."""
    try:
        comment = _comment_repo.create(req.content)
    except Exception as exc:
        _log.error("Failed to create comment: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to create comment")

    audit_log("comment_created", None, {"comment_id": comment.id})
    return {
        "message": "Comment submitted successfully. It will be reviewed before being published.",
        "comment": comment.to_dict(),
    }
