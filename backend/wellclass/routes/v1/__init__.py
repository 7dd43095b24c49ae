# backend/wellclass/routes/v1/__init__.py
"""
API v1 Routes

Versioned API endpoints under /api/v1.
"""

from . import auth, bookings, class_requests, health, messaging, payments, posted_times, prometheus, reviews, teachers

__all__ = [
    "auth",
    "bookings",
    "class_requests",
    "health",
    "messaging",
    "payments",
    "posted_times",
    "prometheus",
    "reviews",
    "teachers",
]
