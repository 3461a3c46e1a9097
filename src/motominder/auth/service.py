"""
Authentication / authorization answers for one caller.

An AuthService is an immutable value: the caller's authentication flag and a
read-only role grant map, fixed at construction. Interactors receive one
explicitly, and it is safe to share between concurrent calls.

    auth_service, error = AuthService.new_auth_service(True, {AuthorizationRole.ADMIN: True})
    auth_service.is_authorized(AuthorizationRole.ADMIN)     # True
    auth_service.is_authorized(AuthorizationRole.GENERAL)   # False, absent roles are denied
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from motominder.core.error import Error
from .roles import AuthorizationRole


class AuthService:
    __slots__ = ("_is_authenticated", "_roles")

    def __init__(self, is_authenticated: bool, roles: Mapping[AuthorizationRole, bool] | None):
        object.__setattr__(self, "_is_authenticated", bool(is_authenticated))
        object.__setattr__(self, "_roles", None if roles is None else MappingProxyType(dict(roles)))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def roles(self) -> Mapping[AuthorizationRole, bool] | None:
        return self._roles

    def is_authenticated(self) -> bool:
        return self._is_authenticated

    def is_authorized(self, role: AuthorizationRole) -> bool:
        if self._roles is None:
            return False
        return bool(self._roles.get(role, False))

    def validate(self) -> Error | None:
        if self._roles is None:
            return Error("The roles and access permissions cannot be None.")

        error = Error()
        for role in self._roles:
            if not isinstance(role, AuthorizationRole):
                error.add(f"'{role}' is not a defined authorization role.")
        return Error.or_none(error)

    @classmethod
    def new_auth_service(
        cls,
        is_authenticated: bool,
        roles: Mapping[AuthorizationRole, bool] | None,
    ) -> tuple[AuthService | None, Error | None]:
        auth_service = cls(is_authenticated, roles)
        error = auth_service.validate()
        if error:
            return None, error
        return auth_service, None

    def __repr__(self) -> str:
        granted = sorted(r.name for r, allowed in (self._roles or {}).items() if allowed and isinstance(r, AuthorizationRole))
        return f"<AuthService(is_authenticated={self._is_authenticated!r}, granted={granted!r})>"
