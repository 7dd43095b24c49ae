"""Principal abstraction for authenticated callers."""

from __future__ import annotations

from dataclasses import dataclass

from .core.enums import RoleName


@dataclass(frozen=True)
class UserPrincipal:
    """
    The verified caller as handed over by the identity layer.

    Only the id and role are trusted; nothing is re-read from the database.
    """

    user_id: str
    role: RoleName

    @property
    def id(self) -> str:
        return self.user_id

    @property
    def is_student(self) -> bool:
        return self.role == RoleName.STUDENT

    @property
    def is_teacher(self) -> bool:
        return self.role == RoleName.TEACHER
