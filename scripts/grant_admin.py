#!/usr/bin/env python3
"""
Grant or revoke admin access from the command line.

The admin API can only be reached by an existing admin, so the first one
has to be created here.

Usage examples:
    python scripts/grant_admin.py grant --email someone@example.com
    python scripts/grant_admin.py revoke --user-id 1098765432
    python scripts/grant_admin.py list

Environment:
    DATABASE_URL - database connection string

"""

import argparse
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from app.db import SessionLocal
# Import related models that User has relationships with
from app.models import learning, baby_name, lexeme
from app.models.user import User
from app.services.audit import log_admin_action

CLI_ACTOR = "cli"


def find_user(db, args):
    if args.user_id:
        return db.query(User).filter(User.id == args.user_id).first()
    if args.email:
        return db.query(User).filter(User.email == args.email.lower()).first()
    print("❌ Provide --email or --user-id")
    return None


def set_admin(args, value):
    db = SessionLocal()
    try:
        user = find_user(db, args)
        if not user:
            print("❌ User not found (they must sign in once first)")
            return 1
        user.is_admin = value
        log_admin_action(db, CLI_ACTOR, "grant" if value else "revoke", "user", user.id, {"email": user.email})
        print(f"✅ {user.email} is_admin={value}")
        return 0
    finally:
        db.close()


def list_admins(args):
    db = SessionLocal()
    try:
        admins = db.query(User).filter(User.is_admin.is_(True)).order_by(User.email).all()
        if not admins:
            print("No admins yet.")
        for user in admins:
            print(f"{user.id}\t{user.email}\t{user.name or ''}")
        return 0
    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description="Manage admin access")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    for name, value in (("grant", True), ("revoke", False)):
        sub = subparsers.add_parser(name, help=f"{name.capitalize()} admin access")
        sub.add_argument("--email", help="User email")
        sub.add_argument("--user-id", help="User ID")
        sub.set_defaults(func=lambda a, v=value: set_admin(a, v))

    list_parser = subparsers.add_parser("list", help="List admins")
    list_parser.set_defaults(func=list_admins)

    args = parser.parse_args()
    if not args.command:
        parser.print_help()
        return 1
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
