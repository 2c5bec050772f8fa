from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from payment_registry.application.ports import PaymentErrorLog
from payment_registry.domain.models import ErrorType, PaymentError, PaymentId


class PaymentErrorRepository(PaymentErrorLog):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def record(self, error: PaymentError) -> None:
        await self._session.execute(
            text("""
                INSERT INTO payment_errors (payment_id, error, description)
                VALUES (:payment_id, :error, :description)
            """),
            {
                "payment_id": str(error.payment_id),
                "error": error.error.value,
                "description": error.description,
            },
        )

    async def get_by_payment_id(self, payment_id: PaymentId) -> list[PaymentError]:
        result = await self._session.execute(
            text("""
                SELECT payment_id, error, description
                FROM payment_errors
                WHERE payment_id = :payment_id
                ORDER BY id
            """),
            {"payment_id": str(payment_id)},
        )
        rows = result.fetchall()
        return [
            PaymentError(
                payment_id=PaymentId.from_string(row.payment_id),
                error=ErrorType(row.error),
                description=row.description,
            )
            for row in rows
        ]
