"""Stripe Checkout session builder for donations.

A thin request/response proxy: one line item, one-time payment or monthly
subscription. No webhooks and no idempotency keys.
"""
import logging
from typing import Dict

import httpx

from app.core.settings import settings
from app.exceptions import UpstreamServiceError

logger = logging.getLogger("app.checkout")

STRIPE_API_BASE = "https://api.stripe.com/v1"
CURRENCY = "usd"
PRODUCT_NAME = "Donation to संस्कृत रोज़"
MONTHLY_PRODUCT_NAME = "Monthly Donation to संस्कृत रोज़"
PRODUCT_DESCRIPTION = "One-time contribution to support Sanskrit language preservation"
MONTHLY_PRODUCT_DESCRIPTION = "Support Sanskrit language preservation with a monthly contribution"


def get_stripe_key(test_mode: bool) -> str:
    key = settings.stripe_test_secret_key if test_mode else settings.stripe_secret_key
    if not key:
        message = "Stripe test mode not configured" if test_mode else "Stripe not configured"
        logger.error(message)
        raise UpstreamServiceError(message)
    return key


def build_checkout_params(amount: int, donation_type: str, success_url: str, cancel_url: str) -> Dict[str, str]:
    """Form fields for POST /v1/checkout/sessions (Stripe's bracketed nesting)."""
    recurring = donation_type == "monthly"
    item = "line_items[0]"
    params = {
        "mode": "subscription" if recurring else "payment",
        "success_url": success_url,
        "cancel_url": cancel_url,
        f"{item}[price_data][currency]": CURRENCY,
        f"{item}[price_data][product_data][name]": MONTHLY_PRODUCT_NAME if recurring else PRODUCT_NAME,
        f"{item}[price_data][product_data][description]":
            MONTHLY_PRODUCT_DESCRIPTION if recurring else PRODUCT_DESCRIPTION,
        f"{item}[price_data][unit_amount]": str(amount),
    }
    if recurring:
        params[f"{item}[price_data][recurring][interval]"] = "month"
    params[f"{item}[quantity]"] = "1"
    return params


async def create_checkout_session(
    amount: int,
    donation_type: str,
    success_url: str,
    cancel_url: str,
    test_mode: bool = False,
) -> Dict:
    """Create the hosted session and return Stripe's JSON (``url`` among it)."""
    key = get_stripe_key(test_mode)
    params = build_checkout_params(amount, donation_type, success_url, cancel_url)
    try:
        async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as client:
            response = await client.post(
                f"{STRIPE_API_BASE}/checkout/sessions",
                data=params,
                headers={"Authorization": f"Bearer {key}"},
            )
    except httpx.HTTPError as e:
        logger.error(f"Stripe request failed: {e}")
        raise UpstreamServiceError("Unable to create checkout session", reason=str(e))

    if response.status_code != 200:
        logger.error(f"Stripe API error: {response.status_code} - {response.text}")
        raise UpstreamServiceError("Unable to create checkout session", reason=response.text)

    session = response.json()
    logger.info(f"Created {'test ' if test_mode else ''}checkout session {session.get('id')} ({donation_type}, {amount})")
    return session
