"""SQLAlchemy ORM models -- relational schema."""
import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase


def _utcnow():
    return datetime.now(timezone.utc)


def _new_uuid():
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    pass


class UserModel(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_uuid)
    username = Column(String(50), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)


class CommentModel(Base):
    __tablename__ = "comments"

    id = Column(String(36), primary_key=True, default=_new_uuid)
    content = Column(Text, nullable=False)
    approved = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)


class VisitorCounterModel(Base):
    """Single-row table; the row with id=1 holds the running count."""

    __tablename__ = "visitor_counter"

    id = Column(Integer, primary_key=True)
    count = Column(Integer, nullable=False, default=0)
