"""Comment entity -- guestbook entry awaiting or past moderation."""
from datetime import datetime, timezone
from uuid import uuid4

MAX_CONTENT_LENGTH = 1000


class Comment:
    """Visitor comment. Hidden from the public listing until approved."""

    def __init__(
        self,
        content: str,
        comment_id: str | None = None,
        approved: bool = False,
        created_at: datetime | None = None,
    ):
        if not content:
            raise ValueError("Comment cannot be empty")
        self._id = comment_id or str(uuid4())
        self._content = content
        self._approved = approved
        self._created_at = created_at or datetime.now(timezone.utc)

    @property
    def id(self) -> str:
        return self._id

    @property
    def content(self) -> str:
        return self._content

    @property
    def approved(self) -> bool:
        return self._approved

    @property
    def created_at(self) -> datetime:
        return self._created_at

    def approve(self) -> None:
        self._approved = True

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "content": self._content,
            "approved": self._approved,
            "created_at": self._created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Comment":
        created_at = data.get("created_at")
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)
        return cls(
            comment_id=data["id"],
            content=data["content"],
            approved=data.get("approved", False),
            created_at=created_at,
        )


def newest_first(comments: list) -> list:
    return sorted(comments, key=lambda c: c.created_at, reverse=True)
