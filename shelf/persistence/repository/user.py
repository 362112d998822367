"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import and_, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from shelf.domain.model import User
from shelf.domain.repository import UserRepository
from shelf.domain.value import AuthProvider, Email, UserId
from shelf.persistence.mappers import row_to_user, user_to_dict
from shelf.persistence.tables import user_identities_table, users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _first(self, stmt) -> Optional[User]:
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return await self._first(select(users_table).where(users_table.c.id == user_id))

    async def find_by_email(self, email: Email) -> Optional[User]:
        """Find a member by normalised email.

        The access gate uses this as the registered-member check, so a hit
        admits without consuming an invitation.
        """
        return await self._first(
            select(users_table).where(users_table.c.email == email.root)
        )

    async def find_by_provider_identity(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[User]:
        """Find the member linked to a provider account.

        Args:
            provider: The authentication provider
            provider_user_id: The account ID on that provider

        Returns:
            User if the identity is linked, None otherwise
        """
        stmt = (
            select(users_table)
            .join(
                user_identities_table,
                users_table.c.id == user_identities_table.c.user_id,
            )
            .where(
                and_(
                    user_identities_table.c.provider == provider.value,
                    user_identities_table.c.provider_user_id == provider_user_id,
                )
            )
        )
        return await self._first(stmt)

    async def save(self, user: User) -> User:
        """Insert or update a user in one statement.

        Raises:
            IntegrityError: If another user already has the email
        """
        values = user_to_dict(user)
        stmt = (
            insert(users_table)
            .values(**values)
            .on_conflict_do_update(
                index_elements=[users_table.c.id],
                set_={k: v for k, v in values.items() if k not in ("id", "created_at")},
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return user
