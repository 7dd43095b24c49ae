# backend/wellclass/core/enums.py
"""
Core enums for the Wellclass marketplace.

Values are stored verbatim in the database and travel over the API,
so they must not be renamed.
"""

from enum import Enum


class RoleName(str, Enum):
    """Roles handed to the core by the identity provider."""

    STUDENT = "STUDENT"
    TEACHER = "TEACHER"


class Modality(str, Enum):
    """Kinds of wellness classes offered on the marketplace."""

    YOGA = "YOGA"
    MEDITATION = "MEDITATION"
    PILATES = "PILATES"
    FITNESS = "FITNESS"
    DANCE = "DANCE"
    OTHER = "OTHER"
