"""Unit tests for HttpPaymentGateway using httpx.MockTransport."""

import json
from collections.abc import Callable

import httpx
import pytest

from payment_registry.domain.exceptions import PaymentGatewayError
from payment_registry.domain.models import Payment
from payment_registry.infrastructure.gateway import VALIDATE_PATH, HttpPaymentGateway


def gateway_for(handler: Callable[[httpx.Request], httpx.Response]) -> HttpPaymentGateway:
    client = httpx.AsyncClient(
        base_url="http://gateway.test",
        transport=httpx.MockTransport(handler),
    )
    return HttpPaymentGateway("http://gateway.test", client=client)


class TestHttpPaymentGateway:
    """Tests for the gateway answer mapping."""

    @pytest.mark.parametrize("valid", [True, False])
    async def test_returns_gateway_answer(self, sample_payment: Payment, valid: bool) -> None:
        gateway = gateway_for(lambda request: httpx.Response(200, json={"valid": valid}))

        assert await gateway.is_valid(sample_payment) is valid

    async def test_posts_payment_payload(self, sample_payment: Payment) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"valid": True})

        await gateway_for(handler).is_valid(sample_payment)

        assert len(seen) == 1
        request = seen[0]
        assert request.method == "POST"
        assert request.url.path == VALIDATE_PATH
        assert json.loads(request.content) == {
            "payment_id": str(sample_payment.payment_id),
            "account_id": 1,
            "payment_type": "ONLINE",
            "credit_card": "abcde",
            "amount": "1",
            "created_on": "2022-01-04T17:00:10",
        }

    async def test_server_error_raises(self, sample_payment: Payment) -> None:
        gateway = gateway_for(lambda request: httpx.Response(503))

        with pytest.raises(PaymentGatewayError, match="HTTP 503"):
            await gateway.is_valid(sample_payment)

    async def test_transport_error_raises(self, sample_payment: Payment) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(PaymentGatewayError, match="ConnectError"):
            await gateway_for(handler).is_valid(sample_payment)

    async def test_non_json_body_raises(self, sample_payment: Payment) -> None:
        gateway = gateway_for(lambda request: httpx.Response(200, text="OK"))

        with pytest.raises(PaymentGatewayError, match="not valid JSON"):
            await gateway.is_valid(sample_payment)

    @pytest.mark.parametrize("body", [{}, {"valid": "yes"}, {"valid": 1}, ["valid"]])
    async def test_malformed_answer_raises(self, sample_payment: Payment, body: object) -> None:
        gateway = gateway_for(lambda request: httpx.Response(200, json=body))

        with pytest.raises(PaymentGatewayError, match="boolean 'valid'"):
            await gateway.is_valid(sample_payment)

    async def test_close_leaves_injected_client_open(self) -> None:
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        gateway = HttpPaymentGateway("http://gateway.test", client=client)

        await gateway.close()

        assert not client.is_closed
        await client.aclose()

    async def test_close_closes_owned_client(self) -> None:
        gateway = HttpPaymentGateway("http://gateway.test")

        await gateway.close()

        assert gateway._client.is_closed
