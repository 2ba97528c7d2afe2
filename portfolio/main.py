"""Entry point. Wires repos into routes and serves the frontend.

Persistence strategy:
  - If DATABASE_URL is set  -> PostgreSQL via SQLAlchemy.
  - Otherwise               -> JSON files under DATA_DIR (development).
"""
import logging
import os
from dotenv import load_dotenv

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_DIR = os.path.dirname(BASE_DIR)
load_dotenv(os.path.join(PROJECT_DIR, ".env"))

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import FileResponse, Response
from fastapi.staticfiles import StaticFiles

from portfolio.api.routes.admin_routes import router as admin_router, init_admin_routes
from portfolio.api.routes.comment_routes import router as comment_router, init_comment_routes
from portfolio.api.routes.game_routes import router as game_router, init_game_routes
from portfolio.api.routes.visitor_routes import router as visitor_router, init_visitor_routes
from portfolio.infrastructure.auth.admin_utils import ensure_admin_user
from portfolio.infrastructure.auth.login_throttle import LoginThrottle
from portfolio.infrastructure.repositories.match_repository import MatchRepository

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
_log = logging.getLogger("portfolio.startup")

DATA_DIR = os.environ.get("DATA_DIR", os.path.join(PROJECT_DIR, "data"))
STATIC_DIR = os.path.join(BASE_DIR, "static")

DATABASE_URL = os.environ.get("DATABASE_URL", "")

app = FastAPI(
    title="Portfolio",
    description="Personal landing page: guestbook, moderation and a mini-game.",
    version="1.0.0",
)

app.add_middleware(GZipMiddleware, minimum_size=1024)

# CORS: comma-separated ALLOWED_ORIGINS, wildcard for local development.
_allowed = os.environ.get("ALLOWED_ORIGINS", "").strip()
if _allowed:
    allow_origins = [o.strip() for o in _allowed.split(",") if o.strip()]
else:
    allow_origins = ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if os.path.exists(STATIC_DIR):
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

# ---------------------------------------------------------------------------
# Persistence wiring
# ---------------------------------------------------------------------------

if DATABASE_URL:
    from portfolio.infrastructure.database.connection import (
        ManagedSessionFactory, create_tables, init_engine,
    )
    from portfolio.infrastructure.repositories.pg_comment_repository import PgCommentRepository
    from portfolio.infrastructure.repositories.pg_user_repository import PgUserRepository
    from portfolio.infrastructure.repositories.pg_visitor_repository import PgVisitorRepository

    _engine = init_engine(DATABASE_URL)
    create_tables(_engine)
    _sf = ManagedSessionFactory(_engine)

    comment_repo = PgCommentRepository(_sf)
    user_repo = PgUserRepository(_sf)
    visitor_repo = PgVisitorRepository(_sf)
    _persistence = "postgresql"
else:
    from portfolio.infrastructure.repositories.comment_repository import CommentRepository
    from portfolio.infrastructure.repositories.user_repository import UserRepository
    from portfolio.infrastructure.repositories.visitor_repository import VisitorRepository

    comment_repo = CommentRepository(os.path.join(DATA_DIR, "comments.json"))
    user_repo = UserRepository(os.path.join(DATA_DIR, "users.json"))
    visitor_repo = VisitorRepository(os.path.join(DATA_DIR, "visitors.json"))
    _persistence = "json"

_log.info("Persistence: %s", _persistence)

ensure_admin_user(user_repo)

# One throttle per process; its store lives and dies with it.
login_throttle = LoginThrottle()

init_comment_routes(comment_repo)
init_admin_routes(user_repo, comment_repo, login_throttle)
init_visitor_routes(visitor_repo)
init_game_routes(MatchRepository())

app.include_router(comment_router)
app.include_router(admin_router)
app.include_router(visitor_router)
app.include_router(game_router)


@app.get("/")
def serve_frontend():
    """Serve index.html."""
    index_path = os.path.join(STATIC_DIR, "index.html")
    if os.path.exists(index_path):
        return FileResponse(index_path, headers={"Cache-Control": "no-store, no-cache, must-revalidate"})
    return {"message": "Portfolio API is running. No frontend found at /static/index.html."}


@app.get("/favicon.ico", include_in_schema=False)
def favicon():
    favicon_path = os.path.join(STATIC_DIR, "favicon.ico")
    if os.path.exists(favicon_path):
        return FileResponse(favicon_path, media_type="image/x-icon")
    return Response(status_code=204)


@app.get("/health")
def health():
    result = {
        "status": "online",
        "persistence": _persistence,
        "throttled_clients": len(login_throttle.store),
    }
    if DATABASE_URL:
        from portfolio.infrastructure.database.connection import check_health
        result["database"] = "connected" if check_health() else "disconnected"
    return result


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("portfolio.main:app", host="0.0.0.0", port=8000, reload=True)
