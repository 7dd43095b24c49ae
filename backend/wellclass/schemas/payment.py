# backend/wellclass/schemas/payment.py
from typing import Optional

from ._strict_base import StrictModel


class WebhookResponse(StrictModel):
    """Acknowledgement returned to Stripe for every authentic event."""

    received: bool = True
    event_type: str
    handled: bool
    booking_id: Optional[str] = None
