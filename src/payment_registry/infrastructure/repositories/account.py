from typing import Any, cast

from sqlalchemy import CursorResult, Row, text
from sqlalchemy.ext.asyncio import AsyncSession

from payment_registry.application.ports import AccountStore
from payment_registry.domain.exceptions import StaleAccountError
from payment_registry.domain.models import Account, AccountId
from payment_registry.infrastructure.repositories._timestamps import to_column


class AccountRepository(AccountStore):
    def __init__(self, session: AsyncSession, lock_timeout_ms: int = 0) -> None:
        self._session = session
        self._lock_timeout_ms = lock_timeout_ms

    async def get(self, account_id: AccountId) -> Account | None:
        result = await self._session.execute(
            text("""
                SELECT account_id, name, email, birthdate, last_payment_date
                FROM accounts
                WHERE account_id = :account_id
            """),
            {"account_id": account_id.value},
        )
        row = result.fetchone()
        if not row:
            return None
        return self._to_account(row)

    async def retrieve_and_lock(self, account_id: AccountId) -> Account | None:
        if self._lock_timeout_ms > 0:
            # Transaction-local, reset together with the row lock.
            await self._session.execute(
                text("SELECT set_config('lock_timeout', :timeout, true)"),
                {"timeout": f"{self._lock_timeout_ms}ms"},
            )
        result = await self._session.execute(
            text("""
                SELECT account_id, name, email, birthdate, last_payment_date
                FROM accounts
                WHERE account_id = :account_id
                FOR UPDATE
            """),
            {"account_id": account_id.value},
        )
        row = result.fetchone()
        if not row:
            return None
        return self._to_account(row)

    async def add(self, account: Account) -> None:
        await self._session.execute(
            text("""
                INSERT INTO accounts (account_id, name, email, birthdate, last_payment_date)
                VALUES (:account_id, :name, :email, :birthdate, :last_payment_date)
            """),
            {
                "account_id": account.account_id.value,
                "name": account.name,
                "email": account.email,
                "birthdate": account.birthdate,
                "last_payment_date": to_column(account.last_payment_date),
            },
        )

    async def update(self, account: Account) -> None:
        result = cast(
            "CursorResult[Any]",
            await self._session.execute(
                text("""
                    UPDATE accounts
                    SET name = :name,
                        email = :email,
                        birthdate = :birthdate,
                        last_payment_date = :last_payment_date
                    WHERE account_id = :account_id
                """),
                {
                    "account_id": account.account_id.value,
                    "name": account.name,
                    "email": account.email,
                    "birthdate": account.birthdate,
                    "last_payment_date": to_column(account.last_payment_date),
                },
            ),
        )
        if (result.rowcount or 0) == 0:
            raise StaleAccountError(account.account_id.value)

    @staticmethod
    def _to_account(row: Row[Any]) -> Account:
        return Account(
            account_id=AccountId(row.account_id),
            name=row.name,
            email=row.email,
            birthdate=row.birthdate,
            last_payment_date=row.last_payment_date,
        )
