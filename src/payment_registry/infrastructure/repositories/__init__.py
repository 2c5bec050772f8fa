"""Repository implementations."""

from payment_registry.infrastructure.repositories.account import AccountRepository
from payment_registry.infrastructure.repositories.payment import PaymentRepository
from payment_registry.infrastructure.repositories.payment_error import PaymentErrorRepository


__all__ = [
    "AccountRepository",
    "PaymentErrorRepository",
    "PaymentRepository",
]
