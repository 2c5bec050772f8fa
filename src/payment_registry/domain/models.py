from dataclasses import dataclass
from datetime import UTC, date, datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID, uuid4

from payment_registry.domain.exceptions import InvalidAmountError, InvalidPaymentIdError


class PaymentType(Enum):
    ONLINE = "ONLINE"
    OFFLINE = "OFFLINE"


class ErrorType(Enum):
    INVALID_PAYMENT = "INVALID_PAYMENT"
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    OTHER = "OTHER"


@dataclass(frozen=True, slots=True)
class PaymentId:
    value: UUID

    @classmethod
    def generate(cls) -> "PaymentId":
        return cls(value=uuid4())

    @classmethod
    def from_string(cls, raw: str) -> "PaymentId":
        try:
            return cls(value=UUID(raw))
        except (ValueError, AttributeError, TypeError) as e:
            raise InvalidPaymentIdError(str(raw)) from e

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class AccountId:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Payment:
    payment_id: PaymentId
    account_id: AccountId
    payment_type: PaymentType
    amount: Decimal
    created_on: datetime
    credit_card: str | None = None

    def __post_init__(self) -> None:
        if not self.amount.is_finite() or self.amount < 0:
            raise InvalidAmountError(self.amount, "amount must be a finite, non-negative decimal")

    @classmethod
    def create(
        cls,
        account_id: AccountId,
        payment_type: PaymentType,
        amount: Decimal,
        credit_card: str | None = None,
    ) -> "Payment":
        return cls(
            payment_id=PaymentId.generate(),
            account_id=account_id,
            payment_type=payment_type,
            amount=amount,
            created_on=datetime.now(UTC),
            credit_card=credit_card,
        )


@dataclass
class Account:
    """Account owned by the account store.

    Registration only ever touches ``last_payment_date``; the other fields are
    carried so the store can write the row back unchanged.
    """

    account_id: AccountId
    email: str
    name: str | None = None
    birthdate: date | None = None
    last_payment_date: datetime | None = None

    def __post_init__(self) -> None:
        if not self.email or not self.email.strip():
            raise ValueError("Account email is required")


@dataclass(frozen=True)
class PaymentError:
    payment_id: PaymentId
    error: ErrorType
    description: str

    @classmethod
    def invalid_payment(cls, payment_id: PaymentId) -> "PaymentError":
        return cls(
            payment_id=payment_id,
            error=ErrorType.INVALID_PAYMENT,
            description=f"Payment {payment_id} was rejected by the gateway",
        )

    @classmethod
    def account_not_found(cls, payment_id: PaymentId, account_id: AccountId) -> "PaymentError":
        return cls(
            payment_id=payment_id,
            error=ErrorType.ACCOUNT_NOT_FOUND,
            description=f"Account {account_id} not found",
        )

    @classmethod
    def from_exception(cls, payment_id: PaymentId, exc: BaseException) -> "PaymentError":
        # Some exceptions (e.g. a bare TimeoutError) carry no message.
        return cls(
            payment_id=payment_id,
            error=ErrorType.OTHER,
            description=str(exc) or type(exc).__name__,
        )
