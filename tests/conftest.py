"""Shared pytest fixtures for payment registry tests."""

from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from payment_registry.application.ports import AbstractUnitOfWork, PaymentGateway
from payment_registry.domain.models import (
    Account,
    AccountId,
    Payment,
    PaymentId,
    PaymentType,
)


PAYMENT_CREATED_ON = datetime(2022, 1, 4, 17, 0, 10)


@pytest.fixture
def mock_payment_store() -> AsyncMock:
    """Create mock PaymentStore."""
    store = AsyncMock()
    store.exists = AsyncMock(return_value=False)
    store.save = AsyncMock(return_value=None)
    return store


@pytest.fixture
def mock_account_store() -> AsyncMock:
    """Create mock AccountStore."""
    store = AsyncMock()
    store.retrieve_and_lock = AsyncMock(return_value=None)
    store.update = AsyncMock(return_value=None)
    return store


@pytest.fixture
def mock_error_log() -> AsyncMock:
    """Create mock PaymentErrorLog."""
    log = AsyncMock()
    log.record = AsyncMock(return_value=None)
    return log


@pytest.fixture
def mock_gateway() -> AsyncMock:
    """Create mock PaymentGateway that accepts every payment."""
    gateway = AsyncMock(spec=PaymentGateway)
    gateway.is_valid = AsyncMock(return_value=True)
    return gateway


@pytest.fixture
def mock_uow(
    mock_payment_store: AsyncMock,
    mock_account_store: AsyncMock,
    mock_error_log: AsyncMock,
) -> AsyncMock:
    """Create mock Unit of Work with all stores."""
    uow = AsyncMock(spec=AbstractUnitOfWork)
    uow.payments = mock_payment_store
    uow.accounts = mock_account_store
    uow.payment_errors = mock_error_log
    uow.commit = AsyncMock(return_value=None)
    uow.rollback = AsyncMock(return_value=None)

    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=None)

    return uow


@pytest.fixture
def account_id() -> AccountId:
    return AccountId(1)


@pytest.fixture
def sample_payment(account_id: AccountId) -> Payment:
    """ONLINE payment of 1 for account 1, created 2022-01-04T17:00:10."""
    return Payment(
        payment_id=PaymentId(uuid4()),
        account_id=account_id,
        payment_type=PaymentType.ONLINE,
        credit_card="abcde",
        amount=Decimal("1"),
        created_on=PAYMENT_CREATED_ON,
    )


@pytest.fixture
def sample_account(account_id: AccountId) -> Account:
    """Existing account without any previous payment."""
    return Account(account_id=account_id, email="mail@sample.com")


def make_payment(
    account_id: int = 1,
    amount: str = "1",
    created_on: datetime = PAYMENT_CREATED_ON,
    payment_type: PaymentType = PaymentType.ONLINE,
) -> Payment:
    """Build a payment with a fresh id; defaults match ``sample_payment``."""
    return Payment(
        payment_id=PaymentId.generate(),
        account_id=AccountId(account_id),
        payment_type=payment_type,
        credit_card="abcde" if payment_type is PaymentType.ONLINE else None,
        amount=Decimal(amount),
        created_on=created_on,
    )
