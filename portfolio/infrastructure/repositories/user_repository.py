"""User persistence (JSON file + in-memory cache)."""
import json
import os
from typing import Dict, Optional

from portfolio.domain.user import User


class UserRepository:
    """JSON-backed user storage. ``data_path=None`` keeps it memory-only."""

    def __init__(self, data_path: Optional[str] = "data/users.json"):
        self._data_path = data_path
        self._users: Dict[str, User] = {}
        self._load()

    def save(self, user: User) -> None:
        self._users[user.id] = user
        self._persist()

    def find_by_username(self, username: str) -> Optional[User]:
        """Lookup by username (case-insensitive)."""
        target = username.lower().strip()
        for user in self._users.values():
            if user.username == target:
                return user
        return None

    def find_by_id(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    def get_all(self) -> list:
        return list(self._users.values())

    def _persist(self) -> None:
        if not self._data_path:
            return
        os.makedirs(os.path.dirname(self._data_path) or ".", exist_ok=True)
        data = {uid: user.to_dict() for uid, user in self._users.items()}
        with open(self._data_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def _load(self) -> None:
        if not self._data_path or not os.path.exists(self._data_path):
            return
        try:
            with open(self._data_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError):
            return
        for uid, udata in data.items():
            self._users[uid] = User.from_dict(udata)
