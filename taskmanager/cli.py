#!/usr/bin/env python3
"""
Task Manager admin CLI.

There is no sign-up endpoint, so accounts are created here.

Usage:
    python -m taskmanager.cli create-user --email EMAIL [--password PW] [--name NAME] [--role user|admin]
    python -m taskmanager.cli purge-sessions
    python -m taskmanager.cli serve [--host HOST] [--port PORT] [--reload]
"""

import argparse
import getpass
import sys
from typing import List, Optional

from pydantic import ValidationError

from taskmanager.config import Settings
from taskmanager.db.database import Database
from taskmanager.errors import AppError
from taskmanager.models.user import UserRole
from taskmanager.schemas.auth import UserCreate
from taskmanager.services.auth_service import AuthService
from taskmanager.utils.logger import setup_logging


def cmd_create_user(
    database: Database,
    settings: Settings,
    email: str,
    password: Optional[str],
    name: Optional[str],
    role: str,
) -> int:
    """Create an account with an explicitly chosen role."""
    if password is None:
        password = getpass.getpass("Password: ")

    try:
        data = UserCreate(email=email, password=password, name=name, role=role)
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(part) for part in err["loc"])
            print(f"Error: {field}: {err['msg']}", file=sys.stderr)
        return 1

    with database.new_session() as session:
        try:
            user = AuthService(session, settings).create_user(
                email=data.email,
                password=data.password,
                role=data.role,
                name=data.name,
            )
        except AppError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            return 1

    print(f"Created {user.role} account {user.email} ({user.id})")
    return 0


def cmd_purge_sessions(database: Database, settings: Settings) -> int:
    with database.new_session() as session:
        count = AuthService(session, settings).purge_expired()
    print(f"Removed {count} expired session(s)")
    return 0


def cmd_serve(settings: Settings, host: Optional[str], port: Optional[int], reload: bool) -> int:
    import uvicorn

    uvicorn.run(
        "taskmanager.main:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="taskmanager", description="Task Manager admin commands")
    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser("create-user", help="Create a login account")
    create.add_argument("--email", required=True)
    create.add_argument("--password", help="Prompted for when omitted")
    create.add_argument("--name")
    create.add_argument(
        "--role",
        choices=[role.value for role in UserRole],
        default=UserRole.USER.value,
    )

    subparsers.add_parser("purge-sessions", help="Delete expired login sessions")

    serve = subparsers.add_parser("serve", help="Run the API server")
    serve.add_argument("--host")
    serve.add_argument("--port", type=int)
    serve.add_argument("--reload", action="store_true")

    return parser


def main(argv: Optional[List[str]] = None, settings: Optional[Settings] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level)

    if args.command == "serve":
        return cmd_serve(settings, args.host, args.port, args.reload)

    database = Database(settings)
    database.init()
    try:
        if args.command == "create-user":
            return cmd_create_user(database, settings, args.email, args.password, args.name, args.role)
        return cmd_purge_sessions(database, settings)
    finally:
        database.dispose()


if __name__ == "__main__":
    sys.exit(main())
