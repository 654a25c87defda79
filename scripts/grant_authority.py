#!/usr/bin/env python3
"""
Grant or revoke the administrator ("authority") role from the command line.

The admin dashboard cannot create the first administrator, so bootstrap it here.

Usage:
    python scripts/grant_authority.py list
    python scripts/grant_authority.py promote user@example.com
    python scripts/grant_authority.py demote user@example.com
"""

import argparse
import asyncio
import sys

import dotenv

dotenv.load_dotenv()

from sqlalchemy import select  # noqa: E402

from app.database import AsyncSessionLocal, engine  # noqa: E402
from app.models.users import users  # noqa: E402
from app.services.user_service import UserService  # noqa: E402


async def list_authorities() -> int:
    async with AsyncSessionLocal() as db:
        result = await db.execute(select(users).where(users.c.role == "authority"))
        rows = result.mappings().all()

    if not rows:
        print("No administrators found")
    for row in rows:
        print(f"  - {row['email']} (uid: {row['firebase_uid']})")
    return 0


async def set_role(email: str, role: str) -> int:
    service = UserService()
    async with AsyncSessionLocal() as db:
        user = await service.get_user_by_email(db, email.lower().strip())
        if not user:
            print(f"❌ User not found: {email}", file=sys.stderr)
            return 1

        if user["role"] == role:
            print(f"ℹ️  {email} already has role {role}")
            return 0

        await service.update_role(db, user["id"], role)

    print(f"✅ {email}: {user['role']} -> {role}")
    return 0


async def main() -> int:
    parser = argparse.ArgumentParser(description="Manage administrator accounts")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("list", help="List administrators")
    promote = sub.add_parser("promote", help="Make a user an administrator")
    promote.add_argument("email")
    demote = sub.add_parser("demote", help="Return an administrator to citizen")
    demote.add_argument("email")
    args = parser.parse_args()

    try:
        if args.command == "list":
            return await list_authorities()
        if args.command == "promote":
            return await set_role(args.email, "authority")
        return await set_role(args.email, "citizen")
    finally:
        await engine.dispose()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
