"""Visitor counter persistence (JSON file)."""
import json
import os
import threading
from typing import Optional


class VisitorRepository:
    def __init__(self, data_path: Optional[str] = "data/visitors.json"):
        self._data_path = data_path
        self._lock = threading.Lock()
        self._count = self._load()

    def get_count(self) -> int:
        return self._count

    def increment(self) -> int:
        with self._lock:
            self._count += 1
            self._save()
            return self._count

    def _load(self) -> int:
        if not self._data_path or not os.path.exists(self._data_path):
            return 0
        try:
            with open(self._data_path, "r", encoding="utf-8") as f:
                return int(json.load(f).get("count", 0))
        except (json.JSONDecodeError, IOError, ValueError, AttributeError):
            return 0

    def _save(self) -> None:
        if not self._data_path:
            return
        os.makedirs(os.path.dirname(self._data_path) or ".", exist_ok=True)
        with open(self._data_path, "w", encoding="utf-8") as f:
            json.dump({"count": self._count}, f)
