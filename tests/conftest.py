from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.adapters.sqlite.migrator import SQLiteMigrator
from src.adapters.sqlite.repos import SQLiteOptionsStore, SQLiteUserMetaStore, SQLiteUserRepo
from src.adapters.tracks import LoggingTracksSink
from src.api.auth_utils import get_password_hash
from src.api.deps import Settings, get_settings, get_tracks_sink
from src.api.main import app
from src.domain.entities import User
from src.rules.loader import load_rules
from src.rules.models import Rules

PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture
def rules_path() -> Path:
    return PROJECT_ROOT / "rules.yaml"


@pytest.fixture
def rules(rules_path: Path) -> Rules:
    return load_rules(rules_path)


@pytest.fixture
def test_db_path(tmp_path: Path) -> str:
    """Temporary SQLite database with all migrations applied."""
    d = tmp_path / "data"
    d.mkdir()
    db = str(d / "store.db")
    SQLiteMigrator(db, str(PROJECT_ROOT / "migrations")).run_migrations()
    return db


@pytest.fixture
def user_repo(test_db_path: str) -> SQLiteUserRepo:
    return SQLiteUserRepo(test_db_path)


@pytest.fixture
def options_store(test_db_path: str) -> SQLiteOptionsStore:
    return SQLiteOptionsStore(test_db_path)


@pytest.fixture
def user_meta_store(test_db_path: str) -> SQLiteUserMetaStore:
    return SQLiteUserMetaStore(test_db_path)


@pytest.fixture
def make_user(user_repo: SQLiteUserRepo) -> Callable[..., User]:
    """Factory saving a user with a real password hash."""

    def _make(email: str, password: str = "secret123", roles: list[str] | None = None) -> User:
        user = User(
            email=email,
            display_name=email.split("@")[0],
            password_hash=get_password_hash(password),
            roles=roles or [],
        )
        user_repo.save(user)
        return user

    return _make


@pytest.fixture
def manager_user(make_user: Callable[..., User]) -> User:
    return make_user("manager@example.com", roles=["shop_manager"])


@pytest.fixture
def admin_user(make_user: Callable[..., User]) -> User:
    return make_user("admin@example.com", roles=["administrator"])


@pytest.fixture
def customer_user(make_user: Callable[..., User]) -> User:
    return make_user("customer@example.com", roles=["customer"])


@pytest.fixture
def tracks_sink() -> LoggingTracksSink:
    return LoggingTracksSink()


@pytest.fixture
def client(
    test_db_path: str, rules_path: Path, tracks_sink: LoggingTracksSink
) -> Iterator[TestClient]:
    """TestClient bound to the temporary database and a fresh analytics sink."""

    def _settings() -> Settings:
        s = Settings()
        s.db_path = test_db_path
        s.rules_path = rules_path
        return s

    app.dependency_overrides[get_settings] = _settings
    app.dependency_overrides[get_tracks_sink] = lambda: tracks_sink
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def login(client: TestClient) -> Callable[[str, str], None]:
    """Log a user in; the client keeps the access token cookie."""

    def _login(email: str, password: str = "secret123") -> None:
        resp = client.post("/api/auth/login", data={"username": email, "password": password})
        assert resp.status_code == 200, resp.text

    return _login
