"""SQLAlchemy-backed user repository."""
from datetime import datetime, timezone
from typing import Optional

from portfolio.domain.user import User
from portfolio.infrastructure.database.models import UserModel


def _to_entity(row: UserModel) -> User:
    return User(
        user_id=row.id,
        username=row.username,
        password_hash=row.password_hash,
        created_at=row.created_at.isoformat() if row.created_at else None,
    )


class PgUserRepository:
    """User persistence via PostgreSQL."""

    def __init__(self, session_factory):
        self._sf = session_factory

    def save(self, user: User) -> None:
        """Insert or update a user record."""
        data = user.to_dict()
        with self._sf() as session:
            existing = session.get(UserModel, data["id"])
            if existing:
                existing.username = data["username"]
                existing.password_hash = data["password_hash"]
            else:
                try:
                    created_at = datetime.fromisoformat(data["created_at"])
                except (ValueError, TypeError):
                    created_at = datetime.now(timezone.utc)
                session.add(UserModel(
                    id=data["id"],
                    username=data["username"],
                    password_hash=data["password_hash"],
                    created_at=created_at,
                ))
            session.commit()

    def find_by_username(self, username: str) -> Optional[User]:
        target = username.lower().strip()
        with self._sf() as session:
            row = session.query(UserModel).filter(UserModel.username == target).first()
            return _to_entity(row) if row else None

    def find_by_id(self, user_id: str) -> Optional[User]:
        with self._sf() as session:
            row = session.get(UserModel, user_id)
            return _to_entity(row) if row else None

    def get_all(self) -> list:
        with self._sf() as session:
            return [_to_entity(r) for r in session.query(UserModel).all()]
