"""Application-wide constants for Wellclass."""

from __future__ import annotations

API_TITLE = "Wellclass API"
API_DESCRIPTION = "Booking, payment and review core for the Wellclass wellness-class marketplace"
API_VERSION = "1.0.0"

# Endpoints excluded from HTTP request metrics
METRICS_PATH = "/metrics"
HEALTH_PATH = "/health"
