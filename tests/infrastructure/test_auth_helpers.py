"""Unit tests for password hashing, JWT handling and admin seeding."""
from portfolio.infrastructure.auth import jwt_handler
from portfolio.infrastructure.auth.admin_utils import ensure_admin_user, is_admin_username
from portfolio.infrastructure.auth.password import hash_password, verify_password
from portfolio.infrastructure.repositories.user_repository import UserRepository


class TestPassword:
    def test_hash_roundtrip(self):
        hashed = hash_password("s3cr3t")
        assert verify_password("s3cr3t", hashed)
        assert not verify_password("wrong", hashed)

    def test_garbage_hash_is_rejected(self):
        assert verify_password("x", "not-a-hash") is False


class TestJwt:
    def test_payload_carries_role(self):
        token = jwt_handler.create_access_token("uid1", "admin", role="admin")
        payload = jwt_handler.verify_token(token)
        assert payload["sub"] == "uid1"
        assert payload["role"] == "admin"
        assert payload["type"] == "access"

    def test_invalid_token_returns_none(self):
        assert jwt_handler.verify_token("not.a.jwt") is None


class TestAdminSeeding:
    def test_username_check_is_case_insensitive(self):
        assert is_admin_username(" Admin ")
        assert not is_admin_username("mallory")
        assert not is_admin_username(None)

    def test_seed_creates_admin_once(self, admin_user_repo):
        first = admin_user_repo.find_by_username("admin")
        assert first is not None
        assert ensure_admin_user(admin_user_repo).id == first.id
        assert len(admin_user_repo.get_all()) == 1

    def test_seed_uses_env_password(self, monkeypatch):
        monkeypatch.setenv("ADMIN_USERNAME", "owner")
        monkeypatch.setenv("ADMIN_PASSWORD", "hunter22")
        repo = UserRepository(data_path=None)
        user = ensure_admin_user(repo)
        assert user.username == "owner"
        assert verify_password("hunter22", user.password_hash)
