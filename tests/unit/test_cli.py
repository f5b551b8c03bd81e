import pytest

from src.adapters.sqlite.migrator import SQLiteMigrator
from src.adapters.sqlite.repos import SQLiteOptionsStore, SQLiteUserMetaStore, SQLiteUserRepo
from src.api.auth_utils import verify_password
from src.app_shell.cli import build_parser, main
from src.domain.entities import BANNER_DISMISSED_META_KEY


@pytest.fixture
def empty_db(tmp_path):
    return str(tmp_path / "cli.db")


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_migrate(empty_db, capsys):
    main(["--db", empty_db, "migrate"])

    assert "Applied 1 migration(s)." in capsys.readouterr().out
    assert SQLiteMigrator(empty_db).pending() == []


def test_create_user(test_db_path, capsys):
    main(["--db", test_db_path, "create-user", "ops@example.com", "pw12345", "--role", "administrator"])

    user = SQLiteUserRepo(test_db_path).get_by_email("ops@example.com")
    assert user is not None
    assert user.roles == ["administrator"]
    assert user.display_name == "ops"
    assert verify_password("pw12345", user.password_hash)
    assert "Created administrator ops@example.com" in capsys.readouterr().out


def test_create_duplicate_user_exits(test_db_path):
    main(["--db", test_db_path, "create-user", "ops@example.com", "pw12345"])
    with pytest.raises(SystemExit):
        main(["--db", test_db_path, "create-user", "ops@example.com", "pw12345"])


def test_visibility(test_db_path, capsys):
    SQLiteOptionsStore(test_db_path).set("coming_soon", "yes")

    main(["--db", test_db_path, "visibility"])

    out = capsys.readouterr().out
    assert "coming_soon: yes" in out
    assert "store_pages_only: not set" in out
    assert "share_key: not set" in out


def test_reset_banner(test_db_path, manager_user):
    meta = SQLiteUserMetaStore(test_db_path)
    meta.set(str(manager_user.id), BANNER_DISMISSED_META_KEY, "yes")

    main(["--db", test_db_path, "reset-banner", "manager@example.com"])

    assert meta.get(str(manager_user.id), BANNER_DISMISSED_META_KEY) == "no"


def test_reset_banner_unknown_user(test_db_path):
    with pytest.raises(SystemExit):
        main(["--db", test_db_path, "reset-banner", "nobody@example.com"])
