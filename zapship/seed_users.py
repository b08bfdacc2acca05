"""
Database seeding script for the operator account.

Creates the ADMIN user profile and prints a development bearer token for it.
Run this script after the database is set up but before first use.
"""

import asyncio

from sqlalchemy import select

from zapship.app.core.jwt import issue_identity_token
from zapship.app.db.session import database
from zapship.app.models.enums import UserRole
from zapship.app.models.user import User

ADMIN_EMAIL = "admin@zapshift.com"


async def seed_users() -> str:
    """
    Seed the operator profile.

    Returns:
        A bearer token for the operator, signed with the configured secret
    """
    await database.create_all()

    async with database.session_factory() as db:
        result = await db.execute(select(User).where(User.email == ADMIN_EMAIL))
        if result.scalar_one_or_none():
            print("ADMIN user already exists, skipping seeding")
        else:
            db.add(User(email=ADMIN_EMAIL, display_name="Zap Shift Admin", role=UserRole.ADMIN))
            await db.commit()
            print(f"Created ADMIN user ({ADMIN_EMAIL})")

    await database.dispose()

    return issue_identity_token(ADMIN_EMAIL, role=UserRole.ADMIN.value)


if __name__ == "__main__":
    token = asyncio.run(seed_users())
    print(f"\nDevelopment token:\n{token}")
