"""Comment persistence (in-memory, optionally mirrored to a JSON file)."""
import json
import logging
import os
import threading
from typing import Dict, List, Optional

from portfolio.domain.comment import Comment, newest_first

_log = logging.getLogger("portfolio.storage")


class CommentRepository:
    """Dict-backed comment storage. ``data_path=None`` keeps it memory-only."""

    def __init__(self, data_path: Optional[str] = "data/comments.json"):
        self._data_path = data_path
        self._comments: Dict[str, Comment] = {}
        self._lock = threading.Lock()
        self._load()

    def create(self, content: str) -> Comment:
        comment = Comment(content=content)
        with self._lock:
            self._comments[comment.id] = comment
            self._persist()
        return comment

    def find_by_id(self, comment_id: str) -> Optional[Comment]:
        with self._lock:
            return self._comments.get(comment_id)

    def get_approved(self) -> List[Comment]:
        return newest_first([c for c in self._snapshot() if c.approved])

    def get_all(self) -> List[Comment]:
        return newest_first(self._snapshot())

    def _snapshot(self) -> List[Comment]:
        with self._lock:
            return list(self._comments.values())

    def approve(self, comment_id: str) -> bool:
        with self._lock:
            comment = self._comments.get(comment_id)
            if comment is None:
                return False
            comment.approve()
            self._persist()
            return True

    def delete(self, comment_id: str) -> bool:
        with self._lock:
            if self._comments.pop(comment_id, None) is None:
                return False
            self._persist()
            return True

    def _persist(self) -> None:
        if not self._data_path:
            return
        os.makedirs(os.path.dirname(self._data_path) or ".", exist_ok=True)
        data = {cid: c.to_dict() for cid, c in self._comments.items()}
        with open(self._data_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def _load(self) -> None:
        if not self._data_path or not os.path.exists(self._data_path):
            return
        try:
            with open(self._data_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as exc:
            _log.warning("Could not read %s (%s); starting empty.", self._data_path, exc)
            return
        for cid, cdata in data.items():
            self._comments[cid] = Comment.from_dict(cdata)
