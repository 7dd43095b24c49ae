"""
Stripe gateway for Wellclass.

Wraps the two Stripe surfaces the core depends on:
- Hosted Checkout session creation for a booking
- Webhook signature verification against every configured secret

Nothing in here touches the database; callers decide what a gateway
result means for a booking.
"""

from dataclasses import dataclass
import logging
from typing import Any, Dict, List, Optional, Sequence

import stripe

from ..core.config import settings
from ..core.exceptions import PaymentSetupException, ServiceException, WebhookAuthenticityException
from ..monitoring.prometheus_metrics import prometheus_metrics
from .base import BaseService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckoutHandle:
    session_id: str
    url: str


class StripeService:
    """Payment gateway adapter over the Stripe SDK."""

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        webhook_secrets: Optional[Sequence[str]] = None,
    ):
        self.logger = logging.getLogger(__name__)
        self.api_key = api_key if api_key is not None else settings.stripe_secret_key.get_secret_value()
        self.webhook_secrets: List[str] = list(
            webhook_secrets if webhook_secrets is not None else settings.webhook_secrets
        )
        self.stripe_configured = bool(self.api_key)

        if self.stripe_configured:
            stripe.api_key = self.api_key
            stripe.max_network_retries = settings.stripe_max_network_retries
        else:
            self.logger.warning("Stripe secret key not configured - checkout creation will fail")

    def _check_stripe_configured(self) -> None:
        if not self.stripe_configured:
            raise PaymentSetupException("Stripe service not configured. Please check STRIPE_SECRET_KEY.")

    @BaseService.measure_operation("stripe_create_checkout_session")
    def create_checkout_session(
        self,
        *,
        amount_minor_units: int,
        currency: str,
        product_name: str,
        description: str,
        success_url: str,
        cancel_url: str,
        metadata: Dict[str, str],
    ) -> CheckoutHandle:
        """
        Create a one-item hosted Checkout session.

        Args:
            amount_minor_units: Price in the currency's smallest unit
            currency: ISO currency code, lower-case
            product_name: Line item name shown to the payer
            description: Line item detail line
            success_url: Redirect after payment
            cancel_url: Redirect when the payer abandons checkout
            metadata: Copied onto the session so webhook events can be traced back

        Returns:
            CheckoutHandle with the session id and hosted URL

        Raises:
            PaymentSetupException: If Stripe is not configured or rejects the request
        """
        self._check_stripe_configured()
        booking_id = metadata.get("bookingId")
        try:
            session = stripe.checkout.Session.create(
                payment_method_types=["card"],
                mode="payment",
                line_items=[
                    {
                        "price_data": {
                            "currency": currency,
                            "product_data": {"name": product_name, "description": description},
                            "unit_amount": amount_minor_units,
                        },
                        "quantity": 1,
                    }
                ],
                success_url=success_url,
                cancel_url=cancel_url,
                metadata=metadata,
            )
        except stripe.StripeError as e:
            self.logger.error(f"Stripe error creating checkout session for booking {booking_id}: {str(e)}")
            raise PaymentSetupException(booking_id=booking_id) from e

        session_id = getattr(session, "id", None)
        url = getattr(session, "url", None)
        if not session_id or not url:
            self.logger.error(f"Stripe returned an incomplete checkout session for booking {booking_id}")
            raise PaymentSetupException(booking_id=booking_id)

        self.logger.info(f"Created checkout session {session_id} for booking {booking_id}")
        return CheckoutHandle(session_id=session_id, url=url)

    def construct_event(self, payload: bytes, signature: Optional[str]) -> Dict[str, Any]:
        """
        Verify a webhook delivery and return the event as a plain dict.

        Each configured secret is tried in order, so one endpoint can serve
        both the Stripe CLI and the deployed platform webhook.

        Raises:
            WebhookAuthenticityException: Missing header, bad signature or unparsable body
            ServiceException: If no webhook secret is configured
        """
        if not signature:
            prometheus_metrics.record_webhook_rejection("missing_signature")
            raise WebhookAuthenticityException("Missing stripe-signature header")
        if not self.webhook_secrets:
            self.logger.error("Webhook secret not configured")
            raise ServiceException("Webhook secret not configured")

        for secret in self.webhook_secrets:
            try:
                event = stripe.Webhook.construct_event(payload, signature, secret)
            except stripe.SignatureVerificationError:
                continue
            except (ValueError, AttributeError, TypeError) as e:
                # Signed body that is not a JSON object
                self.logger.warning(f"Invalid webhook payload: {str(e)}")
                prometheus_metrics.record_webhook_rejection("invalid_payload")
                raise WebhookAuthenticityException("Invalid webhook payload") from e
            return event.to_dict()

        self.logger.warning("Webhook signature verification failed for all configured secrets")
        prometheus_metrics.record_webhook_rejection("invalid_signature")
        raise WebhookAuthenticityException()
