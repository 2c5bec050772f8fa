from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from payment_registry.application.ports import PaymentStore
from payment_registry.domain.models import AccountId, Payment, PaymentId, PaymentType
from payment_registry.infrastructure.repositories._timestamps import to_column


class PaymentRepository(PaymentStore):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def exists(self, payment_id: PaymentId) -> bool:
        result = await self._session.execute(
            text("SELECT EXISTS (SELECT 1 FROM payments WHERE payment_id = :payment_id)"),
            {"payment_id": str(payment_id)},
        )
        return bool(result.scalar())

    async def get(self, payment_id: PaymentId) -> Payment | None:
        result = await self._session.execute(
            text("""
                SELECT payment_id, account_id, payment_type, credit_card, amount, created_on
                FROM payments
                WHERE payment_id = :payment_id
            """),
            {"payment_id": str(payment_id)},
        )
        row = result.fetchone()
        if not row:
            return None
        return Payment(
            payment_id=PaymentId.from_string(row.payment_id),
            account_id=AccountId(row.account_id),
            payment_type=PaymentType(row.payment_type),
            credit_card=row.credit_card,
            amount=row.amount,
            created_on=row.created_on,
        )

    async def save(self, payment: Payment) -> None:
        await self._session.execute(
            text("""
                INSERT INTO payments
                    (payment_id, account_id, payment_type, credit_card, amount, created_on)
                VALUES
                    (:payment_id, :account_id, :payment_type, :credit_card, :amount, :created_on)
            """),
            {
                "payment_id": str(payment.payment_id),
                "account_id": payment.account_id.value,
                "payment_type": payment.payment_type.value,
                "credit_card": payment.credit_card,
                "amount": payment.amount,
                "created_on": to_column(payment.created_on),
            },
        )
