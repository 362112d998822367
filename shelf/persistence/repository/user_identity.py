"""UserIdentity repository implementation using PostgreSQL."""

from typing import Optional

from sqlalchemy import and_, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from shelf.domain.model.user_identity import UserIdentity
from shelf.domain.repository.user_identity import UserIdentityRepository
from shelf.domain.value import AuthProvider, UserId, UserIdentityId
from shelf.persistence.mappers import row_to_user_identity, user_identity_to_dict
from shelf.persistence.tables import user_identities_table


class PostgresUserIdentityRepository(UserIdentityRepository):
    """PostgreSQL implementation of UserIdentityRepository.

    Each provider account links to exactly one member through the
    ``(provider, provider_user_id)`` unique constraint.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(self, identity: UserIdentity) -> UserIdentity:
        """Insert an identity, or refresh its profile and login time.

        Raises:
            IntegrityError: If the provider account is linked to another member
        """
        values = user_identity_to_dict(identity)
        stmt = (
            insert(user_identities_table)
            .values(**values)
            .on_conflict_do_update(
                index_elements=[user_identities_table.c.id],
                set_={
                    "provider_handle": values["provider_handle"],
                    "provider_email": values["provider_email"],
                    "updated_at": values["updated_at"],
                    "last_login_at": values["last_login_at"],
                },
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return identity

    async def find_by_id(self, identity_id: UserIdentityId) -> Optional[UserIdentity]:
        stmt = select(user_identities_table).where(
            user_identities_table.c.id == identity_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user_identity(dict(row)) if row else None

    async def find_by_provider(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[UserIdentity]:
        """Find the identity for a provider account, if it was ever linked."""
        stmt = select(user_identities_table).where(
            and_(
                user_identities_table.c.provider == provider.value,
                user_identities_table.c.provider_user_id == provider_user_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user_identity(dict(row)) if row else None

    async def find_all_by_user_id(self, user_id: UserId) -> list[UserIdentity]:
        """List a member's identities, oldest link first."""
        stmt = (
            select(user_identities_table)
            .where(user_identities_table.c.user_id == user_id)
            .order_by(user_identities_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_user_identity(dict(row)) for row in result.mappings().all()]
