from __future__ import annotations

import logging

from ..core.exceptions import AuthenticationError
from .model import SessionUser, SubjectProfile
from .repository import ProfileRepository, RoleRepository

logger = logging.getLogger(__name__)


class SessionService:
    """Use case: resolve the signed-in user and their role tag.

    Sign-in itself is done by the identity provider, which puts ``user_id``
    into the session; this only turns that id into a SessionUser.
    """

    def __init__(self, profiles: ProfileRepository, roles: RoleRepository):
        self._profiles = profiles
        self._roles = roles

    def load(self, user_id) -> SessionUser:
        try:
            uid = int(user_id)
        except (TypeError, ValueError) as e:
            raise AuthenticationError("Please sign in to continue") from e

        profile = self._profiles.get_by_id(uid)
        if profile is None:
            logger.warning("Session user_id=%s has no profile row", uid)
            profile = SubjectProfile.placeholder(uid)

        return SessionUser(
            user_id=uid,
            full_name=profile.full_name,
            email=profile.email,
            role=self._roles.get_role(uid),
        )
