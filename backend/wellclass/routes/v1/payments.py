# backend/wellclass/routes/v1/payments.py
"""
Payment routes - API v1

Endpoints:
    POST /webhooks/stripe → Handle Stripe webhooks
"""

import asyncio
import logging

from fastapi import APIRouter, Depends, Request

from ...api.dependencies.services import get_payment_webhook_service
from ...core.exceptions import DomainException, handle_domain_exception
from ...schemas.payment import WebhookResponse
from ...services.payment_webhook_service import PaymentWebhookService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["payments-v1"])


@router.post("/webhooks/stripe", response_model=WebhookResponse)
async def handle_stripe_webhook(
    request: Request,
    service: PaymentWebhookService = Depends(get_payment_webhook_service),
) -> WebhookResponse:
    """
    Handle Stripe webhook events.

    Tries each configured webhook secret until one verifies the signature.
    Events that reference unknown bookings are acknowledged so Stripe stops
    retrying; storage failures answer 500 so it retries.

    Note:
        This endpoint has no authentication as it uses webhook signature verification
    """
    payload = await request.body()
    sig_header = request.headers.get("stripe-signature")
    try:
        ack = await asyncio.to_thread(service.handle_event, payload, sig_header)
    except DomainException as e:
        handle_domain_exception(e)
    return WebhookResponse(
        received=ack.received,
        event_type=ack.event_type,
        handled=ack.handled,
        booking_id=ack.booking_id,
    )
