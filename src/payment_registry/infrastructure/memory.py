import asyncio
import copy

from payment_registry.application.ports import (
    AbstractUnitOfWork,
    AccountStore,
    PaymentErrorLog,
    PaymentStore,
)
from payment_registry.domain.exceptions import DuplicatePaymentError, StaleAccountError
from payment_registry.domain.models import Account, AccountId, Payment, PaymentError, PaymentId


class InMemoryStorage:
    """Process-local state shared by every ``InMemoryUnitOfWork``.

    Entities are stored and returned as deep copies, so a caller only changes
    stored state through a committed unit of work. Account locks are plain
    ``asyncio.Lock`` objects and therefore only serialize tasks running on the
    same event loop.
    """

    def __init__(self) -> None:
        self.payments: dict[PaymentId, Payment] = {}
        self.accounts: dict[AccountId, Account] = {}
        self.payment_errors: list[PaymentError] = []
        self._account_locks: dict[AccountId, asyncio.Lock] = {}

    def add_account(self, account: Account) -> None:
        self.accounts[account.account_id] = copy.deepcopy(account)

    def account_lock(self, account_id: AccountId) -> asyncio.Lock:
        if account_id not in self._account_locks:
            self._account_locks[account_id] = asyncio.Lock()
        return self._account_locks[account_id]


class InMemoryPaymentStore(PaymentStore):
    def __init__(self, uow: "InMemoryUnitOfWork") -> None:
        self._uow = uow

    async def exists(self, payment_id: PaymentId) -> bool:
        return payment_id in self._uow.storage.payments or payment_id in self._uow.staged_payments

    async def save(self, payment: Payment) -> None:
        if await self.exists(payment.payment_id):
            raise DuplicatePaymentError(str(payment.payment_id))
        self._uow.staged_payments[payment.payment_id] = payment


class InMemoryAccountStore(AccountStore):
    def __init__(self, uow: "InMemoryUnitOfWork") -> None:
        self._uow = uow

    async def retrieve_and_lock(self, account_id: AccountId) -> Account | None:
        # Locks are only created for known accounts.
        if account_id not in self._uow.storage.accounts:
            return None
        await self._uow.acquire(account_id)
        return copy.deepcopy(self._uow.storage.accounts[account_id])

    async def update(self, account: Account) -> None:
        if account.account_id not in self._uow.storage.accounts:
            raise StaleAccountError(account.account_id.value)
        self._uow.staged_accounts[account.account_id] = copy.deepcopy(account)


class InMemoryPaymentErrorLog(PaymentErrorLog):
    def __init__(self, uow: "InMemoryUnitOfWork") -> None:
        self._uow = uow

    async def record(self, error: PaymentError) -> None:
        self._uow.staged_errors.append(error)


class InMemoryUnitOfWork(AbstractUnitOfWork):
    """Unit of work over ``InMemoryStorage``.

    Writes are staged and only applied on ``commit()``. Account locks taken by
    ``retrieve_and_lock`` are held until ``commit()`` or ``rollback()``.
    """

    def __init__(self, storage: InMemoryStorage) -> None:
        self.storage = storage
        self.payments = InMemoryPaymentStore(self)
        self.accounts = InMemoryAccountStore(self)
        self.payment_errors = InMemoryPaymentErrorLog(self)
        self.staged_payments: dict[PaymentId, Payment] = {}
        self.staged_accounts: dict[AccountId, Account] = {}
        self.staged_errors: list[PaymentError] = []
        self._held_locks: dict[AccountId, asyncio.Lock] = {}

    async def acquire(self, account_id: AccountId) -> None:
        if account_id in self._held_locks:
            return
        lock = self.storage.account_lock(account_id)
        await lock.acquire()
        self._held_locks[account_id] = lock

    def release(self, account_id: AccountId) -> None:
        lock = self._held_locks.pop(account_id, None)
        if lock is not None:
            lock.release()

    async def commit(self) -> None:
        self.storage.payments.update(self.staged_payments)
        self.storage.accounts.update(self.staged_accounts)
        self.storage.payment_errors.extend(self.staged_errors)
        self._reset()

    async def rollback(self) -> None:
        self._reset()

    def _reset(self) -> None:
        self.staged_payments = {}
        self.staged_accounts = {}
        self.staged_errors = []
        for account_id in list(self._held_locks):
            self.release(account_id)
