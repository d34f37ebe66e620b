"""Rewrite plaintext users.password values as PBKDF2 hashes.

Run once before switching the service to PASSWORD_SCHEME=pbkdf2.
"""

from __future__ import annotations

import argparse
import asyncio

from research_node.core.config import Settings
from research_node.db import create_engine_from_settings, create_sessionmaker
from research_node.services.user_store import UserStore


async def rehash(settings: Settings) -> int:
    engine = create_engine_from_settings(settings)
    try:
        return await UserStore(create_sessionmaker(engine)).rehash_plaintext_passwords()
    finally:
        await engine.dispose()


def main() -> int:
    parser = argparse.ArgumentParser(description="Hash plaintext passwords in the users table.")
    parser.add_argument(
        "--database-url",
        default=None,
        help="SQLAlchemy async URL; defaults to DATABASE_URL or the DB_* settings",
    )
    args = parser.parse_args()

    settings = Settings()
    if args.database_url:
        settings = settings.model_copy(update={"database_url_override": args.database_url})

    count = asyncio.run(rehash(settings))
    print(f"Rehashed {count} password(s)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
