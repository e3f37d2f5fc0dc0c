from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import Role
from .model import SubjectProfile


class ProfileRepository(Protocol):
    """Profile lookup interface.

    Note (DIP): services depend on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[SubjectProfile]:
        raise NotImplementedError

    def get_profiles(self, user_ids: Iterable[int]) -> dict[int, SubjectProfile]:
        """Profiles keyed by user id; ids without a row are simply absent."""

        raise NotImplementedError

    def list_all(self) -> Sequence[SubjectProfile]:
        raise NotImplementedError

    def list_recent(self, limit: int) -> Sequence[SubjectProfile]:
        raise NotImplementedError


class RoleRepository(Protocol):
    def get_role(self, user_id: int) -> Role:
        """Role of the user; ``Role.USER`` when no role row exists."""

        raise NotImplementedError

    def count_with_role(self, role: Role) -> int:
        raise NotImplementedError
