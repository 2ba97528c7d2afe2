"""SQLAlchemy-backed comment repository."""
from datetime import timezone
from typing import List, Optional

from portfolio.domain.comment import Comment
from portfolio.infrastructure.database.models import CommentModel


def _to_entity(row: CommentModel) -> Comment:
    created_at = row.created_at
    # SQLite drops tzinfo on the way back.
    if created_at is not None and created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return Comment(
        comment_id=row.id,
        content=row.content,
        approved=row.approved,
        created_at=created_at,
    )


class PgCommentRepository:
    """Comment persistence via PostgreSQL."""

    def __init__(self, session_factory):
        self._sf = session_factory

    def create(self, content: str) -> Comment:
        comment = Comment(content=content)
        with self._sf() as session:
            session.add(CommentModel(
                id=comment.id,
                content=comment.content,
                approved=comment.approved,
                created_at=comment.created_at,
            ))
            session.commit()
        return comment

    def find_by_id(self, comment_id: str) -> Optional[Comment]:
        with self._sf() as session:
            row = session.get(CommentModel, comment_id)
            return _to_entity(row) if row else None

    def get_approved(self) -> List[Comment]:
        with self._sf() as session:
            rows = (
                session.query(CommentModel)
                .filter(CommentModel.approved.is_(True))
                .order_by(CommentModel.created_at.desc())
                .all()
            )
            return [_to_entity(r) for r in rows]

    def get_all(self) -> List[Comment]:
        with self._sf() as session:
            rows = session.query(CommentModel).order_by(CommentModel.created_at.desc()).all()
            return [_to_entity(r) for r in rows]

    def approve(self, comment_id: str) -> bool:
        with self._sf() as session:
            row = session.get(CommentModel, comment_id)
            if not row:
                return False
            row.approved = True
            session.commit()
            return True

    def delete(self, comment_id: str) -> bool:
        with self._sf() as session:
            row = session.get(CommentModel, comment_id)
            if not row:
                return False
            session.delete(row)
            session.commit()
            return True
