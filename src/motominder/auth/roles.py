from enum import Enum


class AuthorizationRole(Enum):
    """Closed set of roles a caller can be granted."""

    UNDEFINED = 0
    NONE = 1
    ADMIN = 2
    ACCOUNTING = 3
    GENERAL = 4

    @property
    def description(self) -> str:
        return self.name.capitalize()
