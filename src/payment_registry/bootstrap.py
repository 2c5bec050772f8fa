import structlog

from payment_registry.application.ports import PaymentGateway
from payment_registry.application.services import PaymentRegistrationService, RegistrationResult
from payment_registry.application.unit_of_work import UnitOfWork
from payment_registry.config import Settings
from payment_registry.domain.models import Payment
from payment_registry.infrastructure.database import Database
from payment_registry.infrastructure.gateway import HttpPaymentGateway


logger = structlog.get_logger()


class PaymentRegistrar:
    """Entry point for inbound handlers: one session and unit of work per payment."""

    def __init__(
        self,
        database: Database,
        gateway: PaymentGateway,
        account_lock_timeout_ms: int = 0,
    ) -> None:
        self._database = database
        self._gateway = gateway
        self._account_lock_timeout_ms = account_lock_timeout_ms

    async def register_payment(self, payment: Payment) -> RegistrationResult:
        async with self._database.session() as session:
            uow = UnitOfWork(session, lock_timeout_ms=self._account_lock_timeout_ms)
            service = PaymentRegistrationService(uow, self._gateway)
            return await service.register_payment(payment)

    async def close(self) -> None:
        if isinstance(self._gateway, HttpPaymentGateway):
            await self._gateway.close()
        await self._database.close()
        logger.info("payment_registrar_closed")


def create_registrar(settings: Settings) -> PaymentRegistrar:
    logger.info(
        "payment_registrar_starting",
        database=settings.database_url.split("@")[-1],
        gateway_url=settings.gateway_url,
        account_lock_timeout_ms=settings.account_lock_timeout_ms,
    )
    database = Database(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    gateway = HttpPaymentGateway(
        settings.gateway_url,
        timeout_seconds=settings.gateway_timeout_seconds,
    )
    return PaymentRegistrar(
        database,
        gateway,
        account_lock_timeout_ms=settings.account_lock_timeout_ms,
    )
