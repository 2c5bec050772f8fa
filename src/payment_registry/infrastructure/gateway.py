from typing import Any

import httpx
import structlog

from payment_registry.application.ports import PaymentGateway
from payment_registry.domain.exceptions import PaymentGatewayError
from payment_registry.domain.models import Payment
from payment_registry.infrastructure.metrics import PAYMENT_GATEWAY_REQUESTS_TOTAL


logger = structlog.get_logger()

VALIDATE_PATH = "/payments/validate"


class HttpPaymentGateway(PaymentGateway):
    """Asks the external payment gateway whether a payment is legitimate.

    The gateway answers ``{"valid": true|false}``. Anything else (transport
    error, non-2xx status, malformed body) is raised as ``PaymentGatewayError``
    rather than being read as a rejection.
    """

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout_seconds)

    async def is_valid(self, payment: Payment) -> bool:
        payment_id = str(payment.payment_id)
        try:
            response = await self._client.post(VALIDATE_PATH, json=self._payload(payment))
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            PAYMENT_GATEWAY_REQUESTS_TOTAL.labels(outcome="error").inc()
            raise PaymentGatewayError(payment_id, f"gateway returned HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            PAYMENT_GATEWAY_REQUESTS_TOTAL.labels(outcome="error").inc()
            raise PaymentGatewayError(payment_id, f"{type(e).__name__}: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            PAYMENT_GATEWAY_REQUESTS_TOTAL.labels(outcome="error").inc()
            raise PaymentGatewayError(payment_id, "response is not valid JSON") from e

        valid = body.get("valid") if isinstance(body, dict) else None
        if not isinstance(valid, bool):
            PAYMENT_GATEWAY_REQUESTS_TOTAL.labels(outcome="error").inc()
            raise PaymentGatewayError(payment_id, "response has no boolean 'valid' field")

        PAYMENT_GATEWAY_REQUESTS_TOTAL.labels(outcome="valid" if valid else "invalid").inc()
        logger.debug("gateway_validation_answered", payment_id=payment_id, valid=valid)
        return valid

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    @staticmethod
    def _payload(payment: Payment) -> dict[str, Any]:
        return {
            "payment_id": str(payment.payment_id),
            "account_id": payment.account_id.value,
            "payment_type": payment.payment_type.value,
            "credit_card": payment.credit_card,
            "amount": str(payment.amount),
            "created_on": payment.created_on.isoformat(),
        }
