"""FastAPI authentication dependencies (Bearer JWT)."""
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from portfolio.infrastructure.auth.admin_utils import is_admin_username
from portfolio.infrastructure.auth.jwt_handler import verify_token

_security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(_security),
) -> dict:
    """Extract and validate the JWT from the Authorization header.

    Returns the decoded payload dict with at least ``sub`` (user id)
    and ``username``.  Raises 401 on missing / invalid / expired tokens.
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = verify_token(credentials.credentials)
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if payload.get("type") != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type. Access token required.",
        )

    return payload


def require_admin(current_user: dict = Depends(get_current_user)) -> dict:
    """Same as get_current_user, plus 403 unless the token belongs to the admin."""
    if current_user.get("role") == "admin":
        return current_user
    if is_admin_username(current_user.get("username")):
        return current_user
    raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied. Admin only.")
