"""Ports consumed by the payment registration workflow.

The workflow only talks to storage through an ``AbstractUnitOfWork``; the
three stores it exposes share one transaction, so a payment save and the
matching account update are committed or discarded together.
"""

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Self

from payment_registry.domain.models import Account, AccountId, Payment, PaymentError, PaymentId


class PaymentStore(ABC):
    """Idempotency check and persistence of payments.

    Contract:
    - exists() answers whether a payment with this id was already saved
    - save() inserts the payment and fails loudly on a duplicate key
    """

    @abstractmethod
    async def exists(self, payment_id: PaymentId) -> bool: ...

    @abstractmethod
    async def save(self, payment: Payment) -> None: ...


class AccountStore(ABC):
    """Exclusive retrieval and update of accounts.

    Contract:
    - retrieve_and_lock() returns None when the account does not exist
    - the returned account stays locked against other units of work until the
      owning unit of work commits or rolls back
    - update() writes back an account previously returned by retrieve_and_lock()
    """

    @abstractmethod
    async def retrieve_and_lock(self, account_id: AccountId) -> Account | None: ...

    @abstractmethod
    async def update(self, account: Account) -> None: ...


class PaymentErrorLog(ABC):
    """Append-only sink for rejected or failed registration attempts."""

    @abstractmethod
    async def record(self, error: PaymentError) -> None: ...


class PaymentGateway(ABC):
    """External validity check of a payment. Advisory and side-effect free."""

    @abstractmethod
    async def is_valid(self, payment: Payment) -> bool: ...


class AbstractUnitOfWork(ABC):
    payments: PaymentStore
    accounts: AccountStore
    payment_errors: PaymentErrorLog

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        # Anything not explicitly committed is discarded and its locks released.
        await self.rollback()

    @abstractmethod
    async def commit(self) -> None: ...

    @abstractmethod
    async def rollback(self) -> None: ...
