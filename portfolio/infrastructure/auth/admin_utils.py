"""Admin account configuration.

The site has a single moderator account. Its credentials come from the
environment:

    ADMIN_USERNAME  – admin login name (case-insensitive, default ``admin``)
    ADMIN_PASSWORD  – admin password (default ``secret123``, demo only)
"""
import logging
import os

from portfolio.domain.user import User
from portfolio.infrastructure.auth.password import hash_password

DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "secret123"

_log = logging.getLogger("portfolio.auth")


def configured_admin_username() -> str:
    return os.environ.get("ADMIN_USERNAME", DEFAULT_ADMIN_USERNAME).strip().lower()


def is_admin_username(username: str | None) -> bool:
    """Return True if *username* is the configured admin account."""
    if not username:
        return False
    return username.strip().lower() == configured_admin_username()


def ensure_admin_user(user_repo) -> User:
    """Create the admin account on first start. Existing accounts are left alone."""
    username = configured_admin_username()
    existing = user_repo.find_by_username(username)
    if existing:
        return existing

    password = os.environ.get("ADMIN_PASSWORD", "")
    if not password:
        _log.warning(
            "ADMIN_PASSWORD not set -- seeding '%s' with the demo password. "
            "Set ADMIN_PASSWORD before deploying.", username,
        )
        password = DEFAULT_ADMIN_PASSWORD

    user = User(username=username, password_hash=hash_password(password))
    user_repo.save(user)
    _log.info("Seeded admin account '%s'.", username)
    return user
