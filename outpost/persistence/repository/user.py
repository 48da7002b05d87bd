"""User repository implementation using SQLAlchemy."""

from typing import Mapping, Optional

import logfire
from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from outpost.domain.error import DuplicateFieldError, NotFoundError
from outpost.domain.model import Identity, User, derive_key
from outpost.domain.repository.user import UserRepository
from outpost.domain.value import RegistryKey
from outpost.persistence.mappers import identity_to_dict, rows_to_user, user_to_dict
from outpost.persistence.tables import metadata, user_identities_table, users_table


class SqlUserRepository(UserRepository):
    """Durable implementation of UserRepository.

    Every call opens its own session, and every save runs in a single
    transaction, so instances can be shared by any number of services.
    Uniqueness across processes is enforced by the database constraints
    created in ``initialize``.
    """

    def __init__(
        self,
        engine: AsyncEngine,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        """Initialize repository.

        Args:
            engine: SQLAlchemy async engine (used for schema creation)
            session_factory: Factory for per-operation sessions
        """
        self.engine = engine
        self.session_factory = session_factory

    async def initialize(self) -> None:
        """Create tables and uniqueness constraints if missing."""
        async with self.engine.begin() as conn:
            await conn.run_sync(metadata.create_all)
        logfire.info("User schema initialized")

    async def find(self, provider_type: str, provider_key: str) -> User:
        """Find the user owning a provider identity.

        The user and all of its identities are read in one statement so
        the result never mixes data from before and after a save.
        """
        key = derive_key(provider_type, provider_key)

        owner = (
            select(user_identities_table.c.user_id)
            .where(user_identities_table.c.registry_key == key)
            .scalar_subquery()
        )
        stmt = (
            select(
                users_table.c.id,
                users_table.c.email,
                user_identities_table.c.provider_type,
                user_identities_table.c.provider_key,
                user_identities_table.c.credential,
            )
            .join(
                user_identities_table,
                user_identities_table.c.user_id == users_table.c.id,
            )
            .where(users_table.c.id == owner)
            .order_by(user_identities_table.c.position)
        )

        async with self.session_factory() as session:
            result = await session.execute(stmt)
            rows = [dict(row) for row in result.mappings().all()]

        if not rows:
            raise NotFoundError("User", f"{provider_type}:{provider_key}")
        return rows_to_user(rows)

    async def save(self, user: User) -> None:
        """Register every identity of a user in one transaction.

        Identities sharing a registry key are stored once: the later one
        wins and keeps the position of the first.
        """
        entries: dict[RegistryKey, Identity] = {}
        for identity in user.identities:
            entries[identity.identity_key()] = identity

        try:
            async with self.session_factory() as session:
                async with session.begin():
                    conflict = await self._find_conflict(session, user.id, entries)
                    if conflict is not None:
                        raise conflict
                    await self._write(session, user, entries)
        except IntegrityError as e:
            # A concurrent writer claimed one of the keys after our check
            logfire.warn("Identity constraint violated", user_id=user.id, error=str(e))
            async with self.session_factory() as session:
                conflict = await self._find_conflict(session, user.id, entries)
            if conflict is None:
                raise
            raise conflict from e

    async def _find_conflict(
        self,
        session: AsyncSession,
        user_id: str,
        entries: Mapping[RegistryKey, Identity],
    ) -> Optional[DuplicateFieldError]:
        """Return an error for the first key owned by a different user."""
        if not entries:
            return None
        stmt = select(user_identities_table.c.registry_key).where(
            user_identities_table.c.registry_key.in_(list(entries)),
            user_identities_table.c.user_id != user_id,
        )
        result = await session.execute(stmt)
        taken = set(result.scalars().all())
        for key, identity in entries.items():
            if key in taken:
                return DuplicateFieldError(identity.provider_type, identity.provider_key)
        return None

    async def _write(
        self,
        session: AsyncSession,
        user: User,
        entries: Mapping[RegistryKey, Identity],
    ) -> None:
        """Upsert the user row and replace its identity rows."""
        existing = await session.execute(
            select(users_table.c.id).where(users_table.c.id == user.id)
        )
        if existing.first():
            await session.execute(
                update(users_table)
                .where(users_table.c.id == user.id)
                .values(**user_to_dict(user))
            )
        else:
            await session.execute(insert(users_table).values(**user_to_dict(user)))

        await session.execute(
            delete(user_identities_table).where(
                user_identities_table.c.user_id == user.id
            )
        )
        rows = [
            identity_to_dict(user.id, identity, key, position)
            for position, (key, identity) in enumerate(entries.items())
        ]
        if rows:
            await session.execute(insert(user_identities_table), rows)
        await session.flush()
