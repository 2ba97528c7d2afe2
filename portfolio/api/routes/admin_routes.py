"""Admin API routes -- throttled login and comment moderation."""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field

from portfolio.infrastructure.audit import log_event as audit_log
from portfolio.infrastructure.auth.admin_utils import is_admin_username
from portfolio.infrastructure.auth.dependencies import require_admin
from portfolio.infrastructure.auth.jwt_handler import create_access_token
from portfolio.infrastructure.auth.login_throttle import LoginThrottle
from portfolio.infrastructure.auth.password import verify_password

router = APIRouter(prefix="/api/admin", tags=["admin"])

_log = logging.getLogger("portfolio.auth")

_user_repo = None
_comment_repo = None
_login_throttle = None


def init_admin_routes(user_repo, comment_repo, login_throttle: LoginThrottle):
    global _user_repo, _comment_repo, _login_throttle
    _user_repo = user_repo
    _comment_repo = comment_repo
    _login_throttle = login_throttle


def get_login_throttle() -> LoginThrottle:
    """Dependency resolving the throttle wired by init_admin_routes."""
    if _login_throttle is None:
        raise RuntimeError("Admin routes not initialised. Call init_admin_routes() first.")
    return _login_throttle


def client_identifier(request: Request) -> str:
    return request.client.host if request.client and request.client.host else "unknown"


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


# ---------------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------------

@router.post("/login")
def api_admin_login(
    req: LoginRequest,
    request: Request,
    throttle: LoginThrottle = Depends(get_login_throttle),
):
    """Authenticate the admin. Repeated failures from one address are blocked."""
    identifier = client_identifier(request)

    if throttle.is_blocked(identifier):
        _log.warning("Blocked login attempt from %s", identifier)
        audit_log("admin_login_blocked", identifier, {})
        raise HTTPException(
            status_code=429,
            detail={"message": "Too many failed login attempts. Try again later.", "blocked": True},
        )

    user = _user_repo.find_by_username(req.username)
    valid = bool(user) and verify_password(req.password, user.password_hash)

    if not valid:
        result = throttle.record_failure(identifier)
        audit_log("admin_login_failed", identifier, result.to_dict())
        if result.blocked:
            _log.warning(
                "Blocking %s for %d ms after repeated login failures",
                identifier, result.block_duration_ms,
            )
            raise HTTPException(
                status_code=429,
                detail={"message": "Too many failed login attempts. Try again later.", **result.to_dict()},
            )
        raise HTTPException(
            status_code=401,
            detail={"message": "Invalid username or password.", **result.to_dict()},
        )

    throttle.record_success(identifier)

    role = "admin" if is_admin_username(user.username) else None
    access_token = create_access_token(user.id, user.username, role=role)
    audit_log("admin_logged_in", user.id, {"username": user.username, "ip": identifier})
    _log.info("Admin '%s' logged in from %s", user.username, identifier)

    return {
        "success": True,
        "message": "Login successful.",
        "access_token": access_token,
        "token_type": "bearer",
        "user": user.to_public_dict(),
    }


# ---------------------------------------------------------------------------
# Comment moderation
# ---------------------------------------------------------------------------

@router.get("/comments")
def api_admin_comments(current_user: dict = Depends(require_admin)):
    """All comments (approved or not), newest first."""
    return [c.to_dict() for c in _comment_repo.get_all()]


@router.patch("/comments/{comment_id}/approve")
def api_admin_approve_comment(comment_id: str, current_user: dict = Depends(require_admin)):
    if not _comment_repo.approve(comment_id):
        raise HTTPException(status_code=404, detail="Comment not found")
    audit_log("comment_approved", current_user.get("sub"), {"comment_id": comment_id})
    return {"message": "Comment approved successfully"}


@router.delete("/comments/{comment_id}")
def api_admin_delete_comment(comment_id: str, current_user: dict = Depends(require_admin)):
    if not _comment_repo.delete(comment_id):
        raise HTTPException(status_code=404, detail="Comment not found")
    audit_log("comment_deleted", current_user.get("sub"), {"comment_id": comment_id})
    return {"message": "Comment deleted successfully"}
