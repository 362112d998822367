"""Unit of work interface."""

from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    """Transaction boundary shared by the repositories of one request.

    Repositories write inside the request transaction, which normally
    commits when the request ends. Long jobs commit part-way through so
    finished work is kept and row locks are released.
    """

    @abstractmethod
    async def commit(self) -> None:
        """Commit everything written so far and start a fresh transaction."""
        pass
