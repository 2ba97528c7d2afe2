"""Visitor counter routes."""
from fastapi import APIRouter

router = APIRouter(prefix="/api", tags=["visitors"])

_visitor_repo = None


def init_visitor_routes(visitor_repo):
    global _visitor_repo
    _visitor_repo = visitor_repo


@router.get("/visitors")
def api_visitor_count():
    return {"count": _visitor_repo.get_count()}


@router.post("/visitors")
def api_register_visit():
    """Count one page view and return the new total."""
    return {"count": _visitor_repo.increment()}
