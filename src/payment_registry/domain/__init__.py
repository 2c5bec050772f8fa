"""Domain layer - business entities and rules."""

from payment_registry.domain.exceptions import (
    DomainError,
    DuplicatePaymentError,
    InvalidAmountError,
    InvalidPaymentIdError,
    PaymentGatewayError,
    StaleAccountError,
)
from payment_registry.domain.models import (
    Account,
    AccountId,
    ErrorType,
    Payment,
    PaymentError,
    PaymentId,
    PaymentType,
)


__all__ = [
    "Account",
    "AccountId",
    "DomainError",
    "DuplicatePaymentError",
    "ErrorType",
    "InvalidAmountError",
    "InvalidPaymentIdError",
    "Payment",
    "PaymentError",
    "PaymentGatewayError",
    "PaymentId",
    "PaymentType",
    "StaleAccountError",
]
