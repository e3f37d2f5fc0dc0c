from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.constants import UNKNOWN_FULL_NAME, UNKNOWN_SCHOOL
from ..core.enums import Role


@dataclass(frozen=True)
class SubjectProfile:
    """Domain entity: display metadata of an intern.

    Note: Plain data object (no DB access code here).
    """

    user_id: int
    full_name: str
    email: str
    school: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def placeholder(cls, user_id: int) -> "SubjectProfile":
        """Stand-in for a subject whose profile row is missing."""
        return cls(user_id=user_id, full_name=UNKNOWN_FULL_NAME, email="", school=UNKNOWN_SCHOOL)

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "full_name": self.full_name,
            "email": self.email,
            "school": self.school or UNKNOWN_SCHOOL,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class SessionUser:
    """The signed-in user as seen by the views; behaviour is selected by ``role``."""

    user_id: int
    full_name: str
    email: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "full_name": self.full_name,
            "email": self.email,
            "role": self.role.value,
        }
