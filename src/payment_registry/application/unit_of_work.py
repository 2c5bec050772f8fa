from sqlalchemy.ext.asyncio import AsyncSession

from payment_registry.application.ports import AbstractUnitOfWork
from payment_registry.infrastructure.repositories import (
    AccountRepository,
    PaymentErrorRepository,
    PaymentRepository,
)


class UnitOfWork(AbstractUnitOfWork):
    """Repositories bound to one SQLAlchemy session and its transaction."""

    def __init__(self, session: AsyncSession, lock_timeout_ms: int = 0) -> None:
        self._session = session
        self.accounts = AccountRepository(session, lock_timeout_ms=lock_timeout_ms)
        self.payments = PaymentRepository(session)
        self.payment_errors = PaymentErrorRepository(session)

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()
