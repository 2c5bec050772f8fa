"""Application layer - ports and the registration use case."""

from payment_registry.application.ports import (
    AbstractUnitOfWork,
    AccountStore,
    PaymentErrorLog,
    PaymentGateway,
    PaymentStore,
)
from payment_registry.application.services import (
    PaymentRegistrationService,
    RegistrationResult,
    RegistrationStatus,
)


__all__ = [
    "AbstractUnitOfWork",
    "AccountStore",
    "PaymentErrorLog",
    "PaymentGateway",
    "PaymentRegistrationService",
    "PaymentStore",
    "RegistrationResult",
    "RegistrationStatus",
]
