"""User entity -- admin account credentials."""
from datetime import datetime, timezone
from uuid import uuid4


class User:
    """Site account with a bcrypt password hash."""

    def __init__(
        self,
        username: str,
        password_hash: str,
        user_id: str | None = None,
        created_at: str | None = None,
    ):
        self._id = user_id or str(uuid4())
        self._username = username.lower().strip()
        self._password_hash = password_hash
        self._created_at = created_at or datetime.now(timezone.utc).isoformat()

    @property
    def id(self) -> str:
        return self._id

    @property
    def username(self) -> str:
        return self._username

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def created_at(self) -> str:
        return self._created_at

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "username": self._username,
            "password_hash": self._password_hash,
            "created_at": self._created_at,
        }

    def to_public_dict(self) -> dict:
        """Safe representation without credentials."""
        return {
            "id": self._id,
            "username": self._username,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(
            user_id=data["id"],
            username=data["username"],
            password_hash=data["password_hash"],
            created_at=data.get("created_at"),
        )
