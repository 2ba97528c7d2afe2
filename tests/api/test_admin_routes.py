"""Integration tests for /api/admin/* (throttled login + moderation)."""
from portfolio.infrastructure.auth.login_throttle import BLOCK_DURATION_SECONDS, MAX_ATTEMPTS

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "secret123"

GOOD = {"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD}
BAD = {"username": ADMIN_USERNAME, "password": "wrong-password"}


class TestLogin:
    def test_valid_credentials(self, client):
        resp = client.post("/api/admin/login", json=GOOD)
        assert resp.status_code == 200
        data = resp.json()
        assert data["success"] is True
        assert data["token_type"] == "bearer"
        assert data["user"]["username"] == ADMIN_USERNAME

    def test_wrong_password_reports_remaining_attempts(self, client):
        resp = client.post("/api/admin/login", json=BAD)
        assert resp.status_code == 401
        detail = resp.json()["detail"]
        assert detail["blocked"] is False
        assert detail["remaining_attempts"] == 4

    def test_unknown_user_counts_as_failure(self, client, throttle):
        resp = client.post("/api/admin/login", json={"username": "ghost", "password": "x"})
        assert resp.status_code == 401
        assert throttle.peek("testclient").count == 1

    def test_missing_fields_rejected(self, client):
        resp = client.post("/api/admin/login", json={"username": ""})
        assert resp.status_code == 422

    def test_fifth_failure_blocks(self, client):
        for _ in range(MAX_ATTEMPTS - 1):
            assert client.post("/api/admin/login", json=BAD).status_code == 401
        resp = client.post("/api/admin/login", json=BAD)
        assert resp.status_code == 429
        detail = resp.json()["detail"]
        assert detail["blocked"] is True
        assert detail["block_duration_ms"] == 900000

    def test_blocked_even_with_correct_password(self, client):
        for _ in range(MAX_ATTEMPTS):
            client.post("/api/admin/login", json=BAD)
        resp = client.post("/api/admin/login", json=GOOD)
        assert resp.status_code == 429
        assert resp.json()["detail"]["blocked"] is True

    def test_block_lifts_after_duration(self, client, clock):
        for _ in range(MAX_ATTEMPTS):
            client.post("/api/admin/login", json=BAD)
        clock.advance(BLOCK_DURATION_SECONDS)
        assert client.post("/api/admin/login", json=GOOD).status_code == 200

    def test_success_resets_accounting(self, client):
        for _ in range(MAX_ATTEMPTS - 1):
            client.post("/api/admin/login", json=BAD)
        assert client.post("/api/admin/login", json=GOOD).status_code == 200
        resp = client.post("/api/admin/login", json=BAD)
        assert resp.json()["detail"]["remaining_attempts"] == 4

    def test_throttle_dependency_can_be_overridden(self, client, clock):
        from portfolio.api.routes.admin_routes import get_login_throttle
        from portfolio.infrastructure.auth.login_throttle import LoginThrottle

        strict = LoginThrottle(clock=clock, max_attempts=1)
        client.app.dependency_overrides[get_login_throttle] = lambda: strict
        try:
            resp = client.post("/api/admin/login", json=BAD)
            assert resp.status_code == 429
        finally:
            client.app.dependency_overrides.clear()


class TestModeration:
    def test_requires_token(self, client):
        assert client.get("/api/admin/comments").status_code == 401

    def test_rejects_non_admin_token(self, client):
        from portfolio.infrastructure.auth.jwt_handler import create_access_token
        token = create_access_token("uid-x", "mallory")
        resp = client.get("/api/admin/comments", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 403

    def test_lists_unapproved_comments(self, client, admin_headers):
        client.post("/api/comments", json={"content": "pending one"})
        resp = client.get("/api/admin/comments", headers=admin_headers)
        assert resp.status_code == 200
        assert [c["content"] for c in resp.json()] == ["pending one"]
        assert resp.json()[0]["approved"] is False

    def test_approve_publishes_comment(self, client, admin_headers):
        cid = client.post("/api/comments", json={"content": "publish me"}).json()["comment"]["id"]
        resp = client.patch(f"/api/admin/comments/{cid}/approve", headers=admin_headers)
        assert resp.status_code == 200
        assert [c["id"] for c in client.get("/api/comments").json()] == [cid]

    def test_delete_comment(self, client, admin_headers):
        cid = client.post("/api/comments", json={"content": "spam"}).json()["comment"]["id"]
        assert client.delete(f"/api/admin/comments/{cid}", headers=admin_headers).status_code == 200
        assert client.get("/api/admin/comments", headers=admin_headers).json() == []

    def test_unknown_comment_404(self, client, admin_headers):
        assert client.patch("/api/admin/comments/nope/approve", headers=admin_headers).status_code == 404
        assert client.delete("/api/admin/comments/nope", headers=admin_headers).status_code == 404


class TestLoginAudit:
    def test_rejected_while_blocked_is_audited(self, client, monkeypatch, tmp_path):
        import json

        monkeypatch.setenv("AUDIT_LOG_DIR", str(tmp_path))
        for _ in range(MAX_ATTEMPTS):
            client.post("/api/admin/login", json=BAD)
        assert client.post("/api/admin/login", json=GOOD).status_code == 429

        entries = [json.loads(line) for line in (tmp_path / "audit.log").read_text().splitlines()]
        actions = [e["action"] for e in entries]
        assert actions.count("admin_login_failed") == MAX_ATTEMPTS
        assert actions[-1] == "admin_login_blocked"
        assert entries[-1]["actor"] == "testclient"
