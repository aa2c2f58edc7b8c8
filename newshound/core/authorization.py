"""Banner authorization.

Decides whether the current request may see the banner. A custom predicate
from the settings replaces the default role check entirely.
"""

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from newshound.config import Settings

logger = logging.getLogger(__name__)

ROLE_ATTRIBUTES = ("role", "user_role", "type")


class Authorization:
    """Role-based authorization with an optional custom override."""

    def __init__(self, settings: "Settings"):
        self.settings = settings

    def is_authorized(self, request: Any) -> bool:
        """Check whether the request's user may see the banner.

        Args:
            request: The host framework's request object.

        Returns:
            True when Newshound is enabled and the user is authorized.
        """
        if not self.settings.enabled:
            return False

        if self.settings.custom_authorization is not None:
            return bool(self.settings.custom_authorization(request))

        user = self._lookup(request, self.settings.current_user_accessor)
        if user is None:
            return False

        role = self._user_role(user)
        if role is None:
            return False

        return str(role) in self.settings.authorized_roles

    @staticmethod
    def _lookup(obj: Any, name: str) -> Any:
        """Read `name` as an attribute, falling back to a mapping key."""
        value = getattr(obj, name, None)
        if value is None and isinstance(obj, Mapping):
            value = obj.get(name)
        return value() if callable(value) else value

    @classmethod
    def _user_role(cls, user: Any) -> Any:
        for attr in ROLE_ATTRIBUTES:
            role = cls._lookup(user, attr)
            if role is not None:
                return getattr(role, "value", role)
        return None
