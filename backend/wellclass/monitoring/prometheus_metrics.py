"""
Prometheus metrics for Wellclass.

Service timings come from the @measure_operation decorator; the domain
counters below are incremented by the booking, webhook and review flows.
"""

from typing import Optional

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Counter, Histogram, generate_latest

# Custom registry so repeated imports in tests never collide with the default one
REGISTRY = CollectorRegistry()

http_request_duration_seconds = Histogram(
    "wellclass_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint", "status_code"],
    registry=REGISTRY,
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

http_requests_total = Counter(
    "wellclass_http_requests_total",
    "Total number of HTTP requests",
    ["method", "endpoint", "status_code"],
    registry=REGISTRY,
)

service_operation_duration_seconds = Histogram(
    "wellclass_service_operation_duration_seconds",
    "Service operation duration in seconds",
    ["service", "operation"],
    registry=REGISTRY,
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

service_operations_total = Counter(
    "wellclass_service_operations_total",
    "Total number of service operations",
    ["service", "operation", "status"],
    registry=REGISTRY,
)

errors_total = Counter(
    "wellclass_errors_total",
    "Total number of errors",
    ["service", "operation", "error_type"],
    registry=REGISTRY,
)

booking_transitions_total = Counter(
    "wellclass_booking_transitions_total",
    "Booking state machine evaluations",
    ["event", "outcome"],  # outcome: APPLIED | NOOP | REJECTED
    registry=REGISTRY,
)

payment_webhook_events_total = Counter(
    "wellclass_payment_webhook_events_total",
    "Verified payment provider events by type and whether they were handled",
    ["event_type", "handled"],
    registry=REGISTRY,
)

payment_webhook_rejections_total = Counter(
    "wellclass_payment_webhook_rejections_total",
    "Payment provider events rejected before processing",
    ["reason"],  # missing_signature | invalid_signature | invalid_payload
    registry=REGISTRY,
)


class PrometheusMetrics:
    """Thin facade over the module-level collectors."""

    @staticmethod
    def record_http_request(method: str, endpoint: str, duration: float, status_code: int) -> None:
        http_request_duration_seconds.labels(
            method=method, endpoint=endpoint, status_code=str(status_code)
        ).observe(duration)
        http_requests_total.labels(method=method, endpoint=endpoint, status_code=str(status_code)).inc()

    @staticmethod
    def record_service_operation(
        service: str,
        operation: str,
        duration: float,
        status: str = "success",
        error_type: Optional[str] = None,
    ) -> None:
        """
        Record service operation metrics from @measure_operation decorator.

        Args:
            service: Service name (e.g., 'BookingService')
            operation: Operation/method name (e.g., 'create_booking')
            duration: Operation duration in seconds
            status: Operation status ('success' or 'error')
            error_type: Type of error if status is 'error'
        """
        service_operation_duration_seconds.labels(service=service, operation=operation).observe(duration)
        service_operations_total.labels(service=service, operation=operation, status=status).inc()
        if status == "error" and error_type:
            errors_total.labels(service=service, operation=operation, error_type=error_type).inc()

    @staticmethod
    def record_booking_transition(event: str, outcome: str) -> None:
        booking_transitions_total.labels(event=event, outcome=outcome).inc()

    @staticmethod
    def record_webhook_event(event_type: str, handled: bool) -> None:
        payment_webhook_events_total.labels(event_type=event_type, handled=str(handled).lower()).inc()

    @staticmethod
    def record_webhook_rejection(reason: str) -> None:
        payment_webhook_rejections_total.labels(reason=reason).inc()

    @staticmethod
    def get_metrics() -> bytes:
        """Metrics in Prometheus text exposition format."""
        return generate_latest(REGISTRY)

    @staticmethod
    def get_content_type() -> str:
        return CONTENT_TYPE_LATEST


prometheus_metrics = PrometheusMetrics()
