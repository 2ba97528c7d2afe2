"""Admin login throttling -- per-client failure counter with a temporary block.

Process-local and best-effort: records live in an in-memory store owned by the
throttle instance and are lost on restart. Failures accumulate while the gap
between consecutive failures stays inside the attempt window; the fifth one
blocks the client for the block duration.
"""
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

MAX_ATTEMPTS = 5
ATTEMPT_WINDOW_SECONDS = 300    # 5 minutes
BLOCK_DURATION_SECONDS = 900    # 15 minutes


@dataclass
class AttemptRecord:
    identifier: str
    count: int
    last_attempt_at: float
    blocked_until: Optional[float] = None


@dataclass(frozen=True)
class FailureResult:
    blocked: bool
    remaining_attempts: int
    block_duration_ms: Optional[int] = None

    def to_dict(self) -> dict:
        data = {"blocked": self.blocked, "remaining_attempts": self.remaining_attempts}
        if self.block_duration_ms is not None:
            data["block_duration_ms"] = self.block_duration_ms
        return data


class AttemptStore:
    """Dict-backed record storage. The lock makes each throttle call atomic."""

    def __init__(self):
        self._records: Dict[str, AttemptRecord] = {}
        self.lock = threading.RLock()

    def get(self, identifier: str) -> Optional[AttemptRecord]:
        return self._records.get(identifier)

    def put(self, record: AttemptRecord) -> None:
        self._records[record.identifier] = record

    def delete(self, identifier: str) -> None:
        self._records.pop(identifier, None)

    def __len__(self) -> int:
        return len(self._records)


class LoginThrottle:
    """Decides whether a login attempt may proceed and records its outcome."""

    def __init__(
        self,
        store: AttemptStore | None = None,
        clock: Callable[[], float] = time.time,
        max_attempts: int = MAX_ATTEMPTS,
        window_seconds: float = ATTEMPT_WINDOW_SECONDS,
        block_seconds: float = BLOCK_DURATION_SECONDS,
    ):
        self._store = store if store is not None else AttemptStore()
        self._clock = clock
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self.block_seconds = block_seconds

    @property
    def store(self) -> AttemptStore:
        return self._store

    def is_blocked(self, identifier: str) -> bool:
        """True while a block is active. An expired block is discarded here."""
        with self._store.lock:
            record = self._store.get(identifier)
            if record is None or record.blocked_until is None:
                return False
            if self._clock() >= record.blocked_until:
                self._store.delete(identifier)
                return False
            return True

    def record_failure(self, identifier: str) -> FailureResult:
        with self._store.lock:
            now = self._clock()
            record = self._store.get(identifier)
            # Only the gap since the previous failure is compared to the window.
            if record is None or now - record.last_attempt_at > self.window_seconds:
                record = AttemptRecord(identifier=identifier, count=1, last_attempt_at=now)
            else:
                record.count += 1
                record.last_attempt_at = now
            self._store.put(record)

            if record.count >= self.max_attempts:
                record.blocked_until = now + self.block_seconds
                return FailureResult(
                    blocked=True,
                    remaining_attempts=0,
                    block_duration_ms=int(self.block_seconds * 1000),
                )
            return FailureResult(
                blocked=False,
                remaining_attempts=self.max_attempts - record.count,
            )

    def record_success(self, identifier: str) -> None:
        with self._store.lock:
            self._store.delete(identifier)

    def peek(self, identifier: str) -> Optional[AttemptRecord]:
        """Current record for *identifier*, without side effects."""
        with self._store.lock:
            return self._store.get(identifier)
