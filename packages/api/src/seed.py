# This project was developed with assistance from AI tools.
"""CLI entrypoint for creating the first admin account.

The admin role cannot self-register, so operators create one here.

Usage:
    python -m src.seed --username admin --email admin@example.com --password ...
"""

import argparse
import asyncio
import json
import logging
import sys

from db import SessionLocal, init_models
from db.enums import UserRole, VerificationStatus
from sqlalchemy.ext.asyncio import AsyncSession

from .core.errors import Conflict
from .services.users import create_user

logger = logging.getLogger(__name__)


async def create_admin(
    session: AsyncSession,
    *,
    username: str,
    email: str,
    password: str,
    first_name: str = "Platform",
    last_name: str = "Admin",
) -> dict:
    """Create a verified admin. Returns a JSON-friendly summary."""
    user = await create_user(
        session,
        username=username,
        email=email,
        password=password,
        first_name=first_name,
        last_name=last_name,
        role=UserRole.ADMIN,
    )
    user.set_verification(VerificationStatus.VERIFIED)
    await session.commit()
    return {"status": "created", "id": user.id, "username": user.username, "role": user.role.value}


async def main(username: str, email: str, password: str) -> int:
    await init_models()
    async with SessionLocal() as session:
        try:
            result = await create_admin(session, username=username, email=email, password=password)
        except Conflict as exc:
            print(json.dumps({"status": "exists", "detail": exc.message}))
            return 1
    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create a wholesale-deals admin account")
    parser.add_argument("--username", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO)
    sys.exit(asyncio.run(main(args.username, args.email, args.password)))
