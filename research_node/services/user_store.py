"""Credential and bearer token lookups against the ``users`` table."""
from __future__ import annotations

import logging
from typing import Literal

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from research_node.core.auth import hash_password, is_password_hash, verify_password
from research_node.core.exceptions import InternalError
from research_node.db.schema import UserRow

logger = logging.getLogger(__name__)

PasswordScheme = Literal["plaintext", "pbkdf2"]


class UserStore:
    """Credential lookups plus the one-off migration to hashed passwords.

    With the ``plaintext`` scheme the password column is compared by equality in
    the query. With ``pbkdf2`` the column holds ``hash_password`` output and each
    candidate row for the username is verified in process.
    """

    def __init__(
        self,
        sessionmaker: async_sessionmaker[AsyncSession],
        *,
        password_scheme: PasswordScheme = "plaintext",
    ) -> None:
        self._sessionmaker = sessionmaker
        self._password_scheme = password_scheme

    async def resolve_token(self, token: str) -> str | None:
        """Return the username owning ``token``; store failures surface the cause."""

        try:
            async with self._sessionmaker() as session:
                return (
                    await session.execute(select(UserRow.username).where(UserRow.token == token))
                ).scalars().first()
        except SQLAlchemyError as exc:
            raise InternalError("Database error", extra={"reason": str(exc)}) from exc

    async def find_token(self, username: str, password: str) -> str | None:
        try:
            async with self._sessionmaker() as session:
                if self._password_scheme == "plaintext":
                    return (
                        await session.execute(
                            select(UserRow.token).where(
                                UserRow.username == username,
                                UserRow.password == password,
                            )
                        )
                    ).scalars().first()
                rows = (
                    await session.execute(
                        select(UserRow.password, UserRow.token).where(UserRow.username == username)
                    )
                ).all()
        except SQLAlchemyError as exc:
            raise InternalError("Database error") from exc

        for stored_hash, token in rows:
            if verify_password(password, stored_hash):
                return token
        logger.debug("No credential match for %s", username)
        return None

    async def rehash_plaintext_passwords(self) -> int:
        """Replace every plaintext password with its PBKDF2 hash.

        Rows already holding a hash are left alone, so running it again is a
        no-op. Returns the number of rows rewritten.
        """

        try:
            async with self._sessionmaker() as session:
                rows = (
                    await session.execute(select(UserRow.username, UserRow.password))
                ).all()
                pending = [
                    (username, password)
                    for username, password in rows
                    if password and not is_password_hash(password)
                ]
                for username, password in pending:
                    await session.execute(
                        update(UserRow)
                        .where(UserRow.username == username)
                        .values(password=hash_password(password))
                    )
                await session.commit()
        except SQLAlchemyError as exc:
            raise InternalError("Database error", extra={"reason": str(exc)}) from exc
        logger.info("Rehashed %d plaintext passwords", len(pending))
        return len(pending)
