"""Append-only audit logger for moderation and admin-login events.

Writes newline-delimited JSON entries to ``logs/audit.log`` (or
``$AUDIT_LOG_DIR/audit.log``). A module-level lock keeps concurrent
threadpool requests from interleaving lines.
"""
import json
import logging
import os
import threading
from datetime import datetime, timezone
from pathlib import Path

_LOCK = threading.Lock()
_log = logging.getLogger("portfolio.audit")

ROOT = Path(__file__).resolve().parent.parent.parent


def log_dir() -> Path:
    override = os.environ.get("AUDIT_LOG_DIR", "").strip()
    return Path(override) if override else ROOT / "logs"


def log_file() -> Path:
    return log_dir() / "audit.log"


def log_event(action: str, actor: str | None, payload: dict | None = None) -> None:
    """Append one event. I/O errors are logged, never raised to the caller."""
    entry = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "action": action,
        "actor": actor,
        "payload": payload or {},
    }
    try:
        with _LOCK:
            log_dir().mkdir(parents=True, exist_ok=True)
            with open(log_file(), "a", encoding="utf-8") as f:
                f.write(json.dumps(entry, ensure_ascii=False) + "\n")
    except OSError as exc:
        _log.error("Audit write failed for %s: %s", action, exc)
