"""JWT admin session tokens (HS256)."""
import os
from datetime import datetime, timedelta, timezone

from jose import jwt, JWTError

SECRET_KEY = os.environ.get("JWT_SECRET_KEY")

# A None key makes python-jose sign with the string "None", so every token
# would be forgeable. Refuse to start instead.
if not SECRET_KEY:  # pragma: no cover
    raise RuntimeError(
        "Missing JWT_SECRET_KEY environment variable. "
        "Add JWT_SECRET_KEY=<strong-random-value> to your .env file before starting."
    )

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60


def create_access_token(user_id: str, username: str, role: str | None = None) -> str:
    """Create a short-lived access token (1 h default)."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "username": username,
        "type": "access",
        "exp": now + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
        "iat": now,
    }
    if role:
        payload["role"] = role
    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


def verify_token(token: str) -> dict | None:
    """Decode and validate a JWT. Returns the payload dict or None."""
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
    if payload.get("sub") is None:
        return None
    return payload
