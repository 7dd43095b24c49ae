"""
Tests for the Stripe gateway adapter.
"""

import json
from unittest.mock import MagicMock, patch

import pytest
import stripe

from wellclass.core.exceptions import PaymentSetupException, ServiceException, WebhookAuthenticityException
from wellclass.services.stripe_service import StripeService

CHECKOUT_ARGS = dict(
    amount_minor_units=10000,
    currency="brl",
    product_name="Aula com Carla Mendes",
    description="Aula de 60 minutos em 15/03/2030",
    success_url="http://localhost:3000/dashboard/aluno?success=true&booking_id=b1",
    cancel_url="http://localhost:3000/agendar/t1?cancelled=true",
    metadata={"bookingId": "b1", "studentId": "s1", "teacherId": "t1"},
)


class TestCreateCheckoutSession:
    def test_returns_handle(self, stripe_service, mock_checkout):
        handle = stripe_service.create_checkout_session(**CHECKOUT_ARGS)

        assert handle.session_id == "cs_test_1"
        assert handle.url == "https://checkout.stripe.com/c/pay/cs_test_1"
        kwargs = mock_checkout.call_args.kwargs
        assert kwargs["payment_method_types"] == ["card"]
        assert kwargs["line_items"][0]["quantity"] == 1
        assert kwargs["metadata"]["bookingId"] == "b1"

    def test_stripe_error_becomes_setup_error(self, stripe_service):
        with patch("stripe.checkout.Session.create", side_effect=stripe.InvalidRequestError("bad amount", "amount")):
            with pytest.raises(PaymentSetupException) as exc_info:
                stripe_service.create_checkout_session(**CHECKOUT_ARGS)

        assert exc_info.value.details == {"booking_id": "b1"}

    def test_incomplete_session_is_a_setup_error(self, stripe_service):
        with patch("stripe.checkout.Session.create", return_value=MagicMock(id="cs_1", url=None)):
            with pytest.raises(PaymentSetupException):
                stripe_service.create_checkout_session(**CHECKOUT_ARGS)

    def test_not_configured(self):
        service = StripeService(api_key="", webhook_secrets=[])

        with pytest.raises(PaymentSetupException):
            service.create_checkout_session(**CHECKOUT_ARGS)


class TestConstructEvent:
    def test_verified_event_is_a_plain_dict(self, stripe_service, stripe_event, sign_payload):
        payload = stripe_event("checkout.session.completed", {"id": "cs_1", "metadata": {"bookingId": "b1"}})

        event = stripe_service.construct_event(payload, sign_payload(payload))

        assert isinstance(event, dict)
        assert event["type"] == "checkout.session.completed"
        assert event["data"]["object"]["metadata"] == {"bookingId": "b1"}

    def test_missing_signature(self, stripe_service, stripe_event):
        payload = stripe_event("checkout.session.completed", {"id": "cs_1"})

        with pytest.raises(WebhookAuthenticityException):
            stripe_service.construct_event(payload, None)

    def test_wrong_secret(self, stripe_service, stripe_event, sign_payload):
        payload = stripe_event("checkout.session.completed", {"id": "cs_1"})

        with pytest.raises(WebhookAuthenticityException) as exc_info:
            stripe_service.construct_event(payload, sign_payload(payload, secret="whsec_forged"))

        assert exc_info.value.code == "INVALID_SIGNATURE"

    def test_tampered_payload(self, stripe_service, stripe_event, sign_payload):
        payload = stripe_event("checkout.session.completed", {"id": "cs_1", "amount_total": 100})
        header = sign_payload(payload)
        tampered = payload.replace(b'"amount_total": 100', b'"amount_total": 1')

        with pytest.raises(WebhookAuthenticityException):
            stripe_service.construct_event(tampered, header)

    def test_stale_timestamp(self, stripe_service, stripe_event, sign_payload):
        payload = stripe_event("checkout.session.completed", {"id": "cs_1"})

        with pytest.raises(WebhookAuthenticityException):
            stripe_service.construct_event(payload, sign_payload(payload, timestamp=1_000_000_000))

    def test_signed_garbage_is_an_invalid_payload(self, stripe_service, sign_payload):
        payload = b"not json"

        with pytest.raises(WebhookAuthenticityException) as exc_info:
            stripe_service.construct_event(payload, sign_payload(payload))

        assert exc_info.value.message == "Invalid webhook payload"

    def test_returns_the_event_stripe_verified(self, stripe_service):
        verified = stripe.Event.construct_from(
            {"id": "evt_1", "type": "checkout.session.expired", "data": {"object": {"id": "cs_9"}}},
            "sk_test_wellclass",
        )

        with patch("stripe.Webhook.construct_event", return_value=verified) as construct:
            event = stripe_service.construct_event(b"body the gateway already parsed", "t=1,v1=sig")

        construct.assert_called_once()
        assert isinstance(event, dict)
        assert event["id"] == "evt_1"
        assert event["data"]["object"]["id"] == "cs_9"

    def test_signed_json_that_is_not_an_object(self, stripe_service, sign_payload):
        payload = b"[1, 2]"

        with pytest.raises(WebhookAuthenticityException) as exc_info:
            stripe_service.construct_event(payload, sign_payload(payload))

        assert exc_info.value.message == "Invalid webhook payload"

    def test_any_configured_secret_verifies(self, stripe_event, sign_payload):
        service = StripeService(api_key="sk_test_wellclass", webhook_secrets=["whsec_cli", "whsec_platform"])
        payload = stripe_event("checkout.session.expired", {"id": "cs_1"})

        event = service.construct_event(payload, sign_payload(payload, secret="whsec_platform"))

        assert event == json.loads(payload)

    def test_no_secret_configured(self, stripe_event, sign_payload):
        service = StripeService(api_key="sk_test_wellclass", webhook_secrets=[])
        payload = stripe_event("checkout.session.expired", {"id": "cs_1"})

        with pytest.raises(ServiceException):
            service.construct_event(payload, sign_payload(payload))
