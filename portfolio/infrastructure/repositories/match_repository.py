"""Mini-game matches (in-memory, process lifetime)."""
import threading
from typing import Dict, Optional

from portfolio.domain.game import Match


class MatchRepository:
    def __init__(self):
        self._matches: Dict[str, Match] = {}
        self.lock = threading.Lock()

    def save(self, match: Match) -> None:
        self._matches[match.id] = match

    def find_by_id(self, match_id: str) -> Optional[Match]:
        return self._matches.get(match_id)
