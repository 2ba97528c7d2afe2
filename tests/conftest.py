"""
Shared pytest fixtures for the portfolio test suite.

Strategy:
- Domain and throttle tests: pure in-memory, zero I/O.
- API tests: FastAPI TestClient with memory-only repos and a LoginThrottle
  driven by a fake clock. DATABASE_URL is cleared so nothing touches a DB.
"""
import os
import random
import shutil
import tempfile

import pytest

os.environ.pop("DATABASE_URL", None)
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-not-for-production-123456")
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "secret123"
_AUDIT_DIR = tempfile.mkdtemp(prefix="portfolio_audit_")
os.environ["AUDIT_LOG_DIR"] = _AUDIT_DIR
os.environ["DATA_DIR"] = _AUDIT_DIR

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "secret123"


class FakeClock:
    """Manually advanced replacement for time.time."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def throttle(clock):
    from portfolio.infrastructure.auth.login_throttle import AttemptStore, LoginThrottle
    return LoginThrottle(store=AttemptStore(), clock=clock)


@pytest.fixture(scope="session")
def admin_user_repo():
    """Memory-only user repo holding the seeded admin (bcrypt hashing is slow, do it once)."""
    from portfolio.infrastructure.auth.admin_utils import ensure_admin_user
    from portfolio.infrastructure.repositories.user_repository import UserRepository

    repo = UserRepository(data_path=None)
    ensure_admin_user(repo)
    return repo


def make_app(user_repo, comment_repo, visitor_repo, match_repo, login_throttle, rng=None):
    from fastapi import FastAPI
    from portfolio.api.routes.admin_routes import router as admin_router, init_admin_routes
    from portfolio.api.routes.comment_routes import router as comment_router, init_comment_routes
    from portfolio.api.routes.game_routes import router as game_router, init_game_routes
    from portfolio.api.routes.visitor_routes import router as visitor_router, init_visitor_routes

    init_comment_routes(comment_repo)
    init_admin_routes(user_repo, comment_repo, login_throttle)
    init_visitor_routes(visitor_repo)
    init_game_routes(match_repo, rng=rng or random.Random(7))

    app = FastAPI()
    app.include_router(comment_router)
    app.include_router(admin_router)
    app.include_router(visitor_router)
    app.include_router(game_router)
    return app


@pytest.fixture
def comment_repo():
    from portfolio.infrastructure.repositories.comment_repository import CommentRepository
    return CommentRepository(data_path=None)


@pytest.fixture
def client(admin_user_repo, comment_repo, throttle):
    """Fresh app per test: empty comments, clean throttle, fake clock."""
    from fastapi.testclient import TestClient
    from portfolio.infrastructure.repositories.match_repository import MatchRepository
    from portfolio.infrastructure.repositories.visitor_repository import VisitorRepository

    app = make_app(
        admin_user_repo,
        comment_repo,
        VisitorRepository(data_path=None),
        MatchRepository(),
        throttle,
    )
    return TestClient(app)


@pytest.fixture
def admin_headers(client):
    resp = client.post("/api/admin/login", json={
        "username": ADMIN_USERNAME,
        "password": ADMIN_PASSWORD,
    })
    assert resp.status_code == 200, f"Login failed: {resp.text}"
    token = resp.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


def pytest_sessionfinish(session, exitstatus):
    shutil.rmtree(_AUDIT_DIR, ignore_errors=True)
