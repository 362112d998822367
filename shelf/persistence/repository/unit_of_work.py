"""UnitOfWork implementation over the request session."""

from sqlalchemy.ext.asyncio import AsyncSession

from shelf.domain.repository.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Commits the session the request's repositories share."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def commit(self) -> None:
        await self.session.commit()
