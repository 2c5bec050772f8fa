from dataclasses import dataclass
from enum import Enum

import structlog

from payment_registry.application.ports import AbstractUnitOfWork, PaymentGateway
from payment_registry.domain.models import Payment, PaymentError, PaymentId
from payment_registry.infrastructure.metrics import (
    PAYMENT_ERRORS_RECORDED_TOTAL,
    PAYMENT_REGISTRATIONS_TOTAL,
    track_registration_duration,
)


logger = structlog.get_logger()


class RegistrationStatus(Enum):
    REGISTERED = "REGISTERED"
    DUPLICATE = "DUPLICATE"
    REJECTED = "REJECTED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class RegistrationResult:
    payment_id: PaymentId
    status: RegistrationStatus
    error: PaymentError | None = None


class PaymentRegistrationService:
    """Registers incoming payments against their owning account.

    ``register_payment`` never raises an ``Exception``: duplicates are ignored,
    rejections and unexpected failures end up in the payment error log, and the
    outcome is reported back as a ``RegistrationResult``.
    """

    def __init__(self, uow: AbstractUnitOfWork, gateway: PaymentGateway) -> None:
        self.uow = uow
        self.gateway = gateway

    @track_registration_duration
    async def register_payment(self, payment: Payment) -> RegistrationResult:
        log = logger.bind(
            payment_id=str(payment.payment_id),
            account_id=payment.account_id.value,
            payment_type=payment.payment_type.value,
            amount=str(payment.amount),
        )

        result: RegistrationResult | None = None
        try:
            async with self.uow:
                try:
                    result = await self._register(payment, log)
                except Exception as exc:
                    result = self._failed(payment, exc, log)
        except Exception as exc:
            if result is None:
                result = self._failed(payment, exc, log)
            else:
                # The outcome is already decided; only the cleanup failed.
                log.warning("payment_rollback_failed", reason=str(exc), exc_info=True)

        if result.error is not None:
            await self._record_error(result.error, log)

        PAYMENT_REGISTRATIONS_TOTAL.labels(
            status=result.status.value,
            error=result.error.error.value if result.error else "",
        ).inc()
        return result

    async def _register(self, payment: Payment, log: structlog.stdlib.BoundLogger) -> RegistrationResult:
        if await self.uow.payments.exists(payment.payment_id):
            log.info("payment_duplicate_ignored")
            return RegistrationResult(payment_id=payment.payment_id, status=RegistrationStatus.DUPLICATE)

        if not await self.gateway.is_valid(payment):
            return self._rejected(PaymentError.invalid_payment(payment.payment_id), log)

        log.info("payment_validated", step="1/3")

        account = await self.uow.accounts.retrieve_and_lock(payment.account_id)
        if account is None:
            return self._rejected(PaymentError.account_not_found(payment.payment_id, payment.account_id), log)

        log.info("account_locked", step="2/3", previous_payment_date=account.last_payment_date)

        # A concurrent resubmission may have committed while this one waited on the lock.
        if await self.uow.payments.exists(payment.payment_id):
            log.info("payment_duplicate_ignored", step="2/3")
            return RegistrationResult(payment_id=payment.payment_id, status=RegistrationStatus.DUPLICATE)

        account.last_payment_date = payment.created_on
        await self.uow.payments.save(payment)
        await self.uow.accounts.update(account)
        await self.uow.commit()

        log.info("payment_registered", step="3/3", last_payment_date=account.last_payment_date)
        return RegistrationResult(payment_id=payment.payment_id, status=RegistrationStatus.REGISTERED)

    def _rejected(self, error: PaymentError, log: structlog.stdlib.BoundLogger) -> RegistrationResult:
        log.info("payment_rejected", error=error.error.value, description=error.description)
        return RegistrationResult(
            payment_id=error.payment_id,
            status=RegistrationStatus.REJECTED,
            error=error,
        )

    def _failed(self, payment: Payment, exc: Exception, log: structlog.stdlib.BoundLogger) -> RegistrationResult:
        log.warning("payment_registration_failed", reason=str(exc), exc_info=True)
        return RegistrationResult(
            payment_id=payment.payment_id,
            status=RegistrationStatus.FAILED,
            error=PaymentError.from_exception(payment.payment_id, exc),
        )

    async def _record_error(self, error: PaymentError, log: structlog.stdlib.BoundLogger) -> None:
        try:
            async with self.uow:
                await self.uow.payment_errors.record(error)
                await self.uow.commit()
        except Exception:
            # Nothing left to hand the error to; keep it in the service log.
            log.exception(
                "payment_error_record_failed",
                error=error.error.value,
                description=error.description,
            )
            return
        PAYMENT_ERRORS_RECORDED_TOTAL.labels(error=error.error.value).inc()
