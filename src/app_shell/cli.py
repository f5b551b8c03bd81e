import argparse
import logging
import os
import sys

from src.adapters.sqlite.migrator import SQLiteMigrator
from src.adapters.sqlite.repos import SQLiteOptionsStore, SQLiteUserMetaStore, SQLiteUserRepo
from src.api.auth_utils import get_password_hash
from src.components.coming_soon_banner import on_user_login
from src.components.site_visibility import read_visibility_options
from src.domain.entities import NOT_SET, SHARE_KEY_OPTION, OptionName, User

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("cli")

DEFAULT_DB_PATH = f"{os.environ.get('STORE_DATA_DIR', './data')}/store.db"


def handle_migrate(args: argparse.Namespace) -> None:
    applied = SQLiteMigrator(args.db).run_migrations()
    print(f"Applied {len(applied)} migration(s).")


def handle_create_user(args: argparse.Namespace) -> None:
    repo = SQLiteUserRepo(args.db)
    if repo.get_by_email(args.email):
        logger.error(f"User {args.email} already exists.")
        sys.exit(1)

    user = User(
        email=args.email,
        display_name=args.display_name or args.email.split("@")[0],
        password_hash=get_password_hash(args.password),
        roles=[args.role],
    )
    repo.save(user)
    print(f"Created {args.role} {user.email} ({user.id})")


def handle_visibility(args: argparse.Namespace) -> None:
    options = SQLiteOptionsStore(args.db)
    values = read_visibility_options(options)
    for name in OptionName:
        print(f"{name.value}: {values.get(name, NOT_SET)}")
    print(f"{SHARE_KEY_OPTION}: {'set' if options.get(SHARE_KEY_OPTION) else NOT_SET}")


def handle_reset_banner(args: argparse.Namespace) -> None:
    user = SQLiteUserRepo(args.db).get_by_email(args.email)
    if not user:
        logger.error(f"User {args.email} not found.")
        sys.exit(1)

    on_user_login(str(user.id), user_meta=SQLiteUserMetaStore(args.db))
    print(f"Coming soon banner re-armed for {user.email}.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Storefront launch controls CLI")
    parser.add_argument("--db", default=DEFAULT_DB_PATH, help="Path to the SQLite database")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # migrate
    subparsers.add_parser("migrate", help="Apply pending database migrations")

    # create-user
    user_parser = subparsers.add_parser("create-user", help="Create a user")
    user_parser.add_argument("email")
    user_parser.add_argument("password")
    user_parser.add_argument(
        "--role",
        default="shop_manager",
        choices=["administrator", "shop_manager", "editor", "customer"],
    )
    user_parser.add_argument("--display-name")

    # visibility
    subparsers.add_parser("visibility", help="Show site visibility options")

    # reset-banner
    reset_parser = subparsers.add_parser(
        "reset-banner", help="Re-arm a dismissed coming soon banner for a user"
    )
    reset_parser.add_argument("email")

    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    if args.command == "migrate":
        handle_migrate(args)
    elif args.command == "create-user":
        handle_create_user(args)
    elif args.command == "visibility":
        handle_visibility(args)
    elif args.command == "reset-banner":
        handle_reset_banner(args)


if __name__ == "__main__":
    main()
