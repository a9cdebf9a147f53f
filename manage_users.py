#!/usr/bin/env python3
"""
Manage users of the services that keep accounts (auth, covid_portal, twitter).

The COVID-19 portal has no registration route, so its users are
created here.  The script never reads or reveals existing passwords;
it only stores new PBKDF2 hashes.

Usage:
    python manage_users.py create-user --service covid_portal --username christopher_phillips --name "Christopher Phillips"
    python manage_users.py reset-password --service twitter --username JoeBiden --password "NewStrongPass!234"
    python manage_users.py issue-token --service covid_portal --username christopher_phillips --days 365

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import asyncio
import getpass
import sys
from typing import List, Optional

from crud_services_api.app.core.db import get_cursor, init_db
from crud_services_api.app.core.security import hash_password, issue_token
from crud_services_api.app.schemas.user import TwitterUserCreate, UserCreate
from crud_services_api.app.services.user_service import PASSWORD_TOO_SHORT, USER_SERVICES


def _password(args: argparse.Namespace) -> str:
    return args.password or getpass.getpass("Enter NEW password: ")


def create_user(args: argparse.Namespace) -> int:
    service = USER_SERVICES[args.service]
    password = _password(args)
    if args.service == "twitter":
        user = TwitterUserCreate(username=args.username, password=password, name=args.name, gender=args.gender)
    else:
        user = UserCreate(
            username=args.username,
            password=password,
            name=args.name,
            gender=args.gender,
            location=args.location,
        )
    init_db(args.service)
    try:
        asyncio.run(service.create_user(user))
    except ValueError as e:
        print(f"[!] {e}", file=sys.stderr)
        return 1
    print(f"[+] User created in {args.service}: {args.username}")
    return 0


def reset_password(args: argparse.Namespace) -> int:
    new_password = _password(args)
    if not new_password:
        print("[!] Empty password is not allowed.", file=sys.stderr)
        return 1
    min_length = USER_SERVICES[args.service].min_password_length
    if len(new_password) < min_length:
        print(f"[!] {PASSWORD_TOO_SHORT} (at least {min_length} characters).", file=sys.stderr)
        return 1
    init_db(args.service)
    with get_cursor(args.service) as cur:
        cur.execute(
            "UPDATE user SET password = ? WHERE username = ?",
            (hash_password(new_password), args.username),
        )
        updated = cur.rowcount
    if not updated:
        print(f"[!] No user found with username: {args.username}", file=sys.stderr)
        return 2
    print(f"[+] Password updated for user: {args.username}")
    return 0


def create_token(args: argparse.Namespace) -> int:
    init_db(args.service)
    user = asyncio.run(USER_SERVICES[args.service].get_user(args.username))
    if user is None:
        print(f"[!] No user found with username: {args.username}", file=sys.stderr)
        return 2
    print(issue_token(args.username, args.service, expires_delta=args.days * 24 * 60 * 60))
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Manage service users (SQLite).")
    sub = ap.add_subparsers(dest="command", required=True)

    def add_common(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("--service", required=True, choices=sorted(USER_SERVICES), help="Service owning the user")
        parser.add_argument("--username", required=True, help="Username")

    create = sub.add_parser("create-user", help="Register a new user")
    add_common(create)
    create.add_argument("--password", help="Password. If omitted, you'll be prompted securely.")
    create.add_argument("--name", help="Display name")
    create.add_argument("--gender")
    create.add_argument("--location", help="Ignored by the twitter service")
    create.set_defaults(handler=create_user)

    reset = sub.add_parser("reset-password", help="Set a new password for an existing user")
    add_common(reset)
    reset.add_argument("--password", help="New password. If omitted, you'll be prompted securely.")
    reset.set_defaults(handler=reset_password)

    token = sub.add_parser("issue-token", help="Print a long-lived token for an existing user")
    add_common(token)
    token.add_argument("--days", type=int, default=365, help="Token lifetime in days (default: 365)")
    token.set_defaults(handler=create_token)
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
