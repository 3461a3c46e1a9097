from .roles import AuthorizationRole
from .service import AuthService

__all__ = ["AuthorizationRole", "AuthService"]
