"""Tests for the Stripe checkout session endpoint."""
import asyncio
from unittest.mock import AsyncMock, patch
from urllib.parse import parse_qs

import httpx
import pytest

from app.core.settings import settings
from app.services.checkout import build_checkout_params, create_checkout_session

BODY = {
    "amount": 2500,
    "type": "one-time",
    "successUrl": "https://example.com/thanks",
    "cancelUrl": "https://example.com/donate",
}


def test_one_time_params():
    params = build_checkout_params(2500, "one-time", "https://s", "https://c")
    assert params["mode"] == "payment"
    assert params["line_items[0][price_data][unit_amount]"] == "2500"
    assert params["line_items[0][price_data][currency]"] == "usd"
    assert params["line_items[0][quantity]"] == "1"
    assert "line_items[0][price_data][recurring][interval]" not in params


def test_monthly_params():
    params = build_checkout_params(1000, "monthly", "https://s", "https://c")
    assert params["mode"] == "subscription"
    assert params["line_items[0][price_data][recurring][interval]"] == "month"
    assert params["line_items[0][price_data][product_data][name]"].startswith("Monthly Donation")


class TestCheckoutEndpoint:

    def test_returns_session_url(self, client):
        with patch("app.routes.checkout.create_checkout_session",
                   new=AsyncMock(return_value={"id": "cs_test_1", "url": "https://checkout.stripe.com/c/pay/cs_test_1"})) as mock_create:
            response = client.post("/api/create-checkout-session", json={**BODY, "testMode": True})

        assert response.status_code == 200
        assert response.json() == {"url": "https://checkout.stripe.com/c/pay/cs_test_1"}
        kwargs = mock_create.await_args.kwargs
        assert kwargs["amount"] == 2500
        assert kwargs["donation_type"] == "one-time"
        assert kwargs["test_mode"] is True

    @pytest.mark.parametrize("amount", [0, -100, 12.5, "2500", True, None])
    def test_rejects_bad_amount(self, client, amount):
        response = client.post("/api/create-checkout-session", json={**BODY, "amount": amount})
        assert response.status_code == 400

    def test_rejects_unknown_type(self, client):
        response = client.post("/api/create-checkout-session", json={**BODY, "type": "yearly"})
        assert response.status_code == 400

    def test_missing_live_key(self, client):
        response = client.post("/api/create-checkout-session", json=BODY)
        assert response.status_code == 500
        assert response.json()["detail"] == "Stripe not configured"

    def test_missing_test_key(self, client, monkeypatch):
        monkeypatch.setattr(settings, "stripe_secret_key", "sk_live_x")
        response = client.post("/api/create-checkout-session", json={**BODY, "testMode": True})
        assert response.status_code == 500
        assert response.json()["detail"] == "Stripe test mode not configured"

    def test_options_preflight(self, client):
        response = client.options("/api/create-checkout-session")
        assert response.status_code == 204
        assert response.headers["access-control-allow-origin"] == "*"


class TestStripeCall:
    """create_checkout_session against a mocked Stripe API."""

    @pytest.fixture
    def stripe(self, monkeypatch):
        monkeypatch.setattr(settings, "stripe_secret_key", "sk_live_123")
        monkeypatch.setattr(settings, "stripe_test_secret_key", "sk_test_456")
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"id": "cs_1", "url": "https://checkout.stripe.com/pay/cs_1"})

        real_client = httpx.AsyncClient

        def make_client(*args, **kwargs):
            kwargs["transport"] = httpx.MockTransport(handler)
            return real_client(*args, **kwargs)

        monkeypatch.setattr("app.services.checkout.httpx.AsyncClient", make_client)
        return seen

    def test_posts_form_with_selected_key(self, stripe):
        session = asyncio.run(create_checkout_session(1500, "monthly", "https://s", "https://c", test_mode=True))
        assert session["url"] == "https://checkout.stripe.com/pay/cs_1"

        request = stripe[0]
        assert request.url == "https://api.stripe.com/v1/checkout/sessions"
        assert request.headers["authorization"] == "Bearer sk_test_456"
        form = parse_qs(request.content.decode())
        assert form["mode"] == ["subscription"]
        assert form["line_items[0][price_data][unit_amount]"] == ["1500"]

    def test_endpoint_end_to_end(self, client, stripe):
        response = client.post("/api/create-checkout-session", json=BODY)
        assert response.status_code == 200
        assert response.json()["url"] == "https://checkout.stripe.com/pay/cs_1"
        assert stripe[0].headers["authorization"] == "Bearer sk_live_123"
