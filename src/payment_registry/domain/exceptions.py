class DomainError(Exception):
    """Base exception for domain errors."""


class InvalidPaymentIdError(DomainError):
    """Raised when a payment identifier is not a valid UUID."""

    def __init__(self, raw_value: str) -> None:
        self.raw_value = raw_value
        super().__init__(f"Invalid payment id: {raw_value!r}")


class InvalidAmountError(DomainError):
    """Raised when payment amount is invalid."""

    def __init__(self, amount: object, reason: str) -> None:
        self.amount = amount
        self.reason = reason
        super().__init__(f"Invalid amount {amount}: {reason}")


class StaleAccountError(DomainError):
    """Raised when a locked account row disappears before it is updated."""

    def __init__(self, account_id: int) -> None:
        self.account_id = account_id
        super().__init__(f"Account {account_id} could not be updated: row no longer exists")


class PaymentGatewayError(DomainError):
    """Raised when the validation gateway cannot give a usable answer."""

    def __init__(self, payment_id: str, reason: str) -> None:
        self.payment_id = payment_id
        self.reason = reason
        super().__init__(f"Gateway validation failed for payment {payment_id}: {reason}")


class DuplicatePaymentError(DomainError):
    """Raised when a payment id is saved a second time."""

    def __init__(self, payment_id: str) -> None:
        self.payment_id = payment_id
        super().__init__(f"Payment {payment_id} already exists")
