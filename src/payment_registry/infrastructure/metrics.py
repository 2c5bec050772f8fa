import time
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from prometheus_client import Counter, Histogram


PAYMENT_REGISTRATIONS_TOTAL = Counter(
    "payment_registrations_total",
    "Total number of payment registration attempts",
    ["status", "error"],
)

PAYMENT_ERRORS_RECORDED_TOTAL = Counter(
    "payment_errors_recorded_total",
    "Payment errors written to the error log",
    ["error"],
)

PAYMENT_GATEWAY_REQUESTS_TOTAL = Counter(
    "payment_gateway_requests_total",
    "Validation requests sent to the payment gateway",
    ["outcome"],
)

PAYMENT_REGISTRATION_DURATION_SECONDS = Histogram(
    "payment_registration_duration_seconds",
    "Payment registration duration",
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

P = ParamSpec("P")
R = TypeVar("R")


def track_registration_duration(
    func: Callable[P, Awaitable[R]],
) -> Callable[P, Awaitable[R]]:
    @wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        start = time.perf_counter()
        try:
            return await func(*args, **kwargs)
        finally:
            duration = time.perf_counter() - start
            PAYMENT_REGISTRATION_DURATION_SECONDS.observe(duration)

    return wrapper
