import logging
from fastapi import APIRouter

from app.exceptions import UpstreamServiceError
from app.schemas.checkout import CheckoutSessionOut, CheckoutSessionRequest
from app.services.checkout import create_checkout_session

logger = logging.getLogger("app.routes.checkout")

router = APIRouter(prefix="/api", tags=["Donations"])


@router.post("/create-checkout-session", response_model=CheckoutSessionOut)
async def create_session(payload: CheckoutSessionRequest):
    """Hosted Stripe Checkout URL for a one-time or monthly donation."""
    session = await create_checkout_session(
        amount=payload.amount,
        donation_type=payload.type,
        success_url=payload.success_url,
        cancel_url=payload.cancel_url,
        test_mode=payload.test_mode,
    )
    url = session.get("url")
    if not url:
        raise UpstreamServiceError("Unable to create checkout session", reason="Stripe response missing url")
    return {"url": url}
