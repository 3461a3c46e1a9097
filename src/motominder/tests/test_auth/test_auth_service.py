import pytest

from motominder.auth import AuthorizationRole, AuthService


class TestAuthService:

    def test_admin_is_authorized_for_admin_only(self, admin_auth_service):
        assert admin_auth_service.is_authenticated() is True
        assert admin_auth_service.is_authorized(AuthorizationRole.ADMIN) is True
        # Absent roles are denied.
        assert admin_auth_service.is_authorized(AuthorizationRole.GENERAL) is False

    def test_explicitly_denied_role(self, unauthorized_auth_service):
        assert unauthorized_auth_service.is_authorized(AuthorizationRole.ADMIN) is False
        assert unauthorized_auth_service.is_authorized(AuthorizationRole.GENERAL) is True

    def test_service_is_immutable(self, admin_auth_service):
        with pytest.raises(AttributeError):
            admin_auth_service._is_authenticated = False

        with pytest.raises(TypeError):
            admin_auth_service.roles[AuthorizationRole.GENERAL] = True

    def test_roles_are_copied_at_construction(self):
        roles = {AuthorizationRole.ADMIN: True}
        auth_service, _ = AuthService.new_auth_service(True, roles)

        roles[AuthorizationRole.ADMIN] = False

        assert auth_service.is_authorized(AuthorizationRole.ADMIN) is True

    def test_none_roles_are_rejected(self):
        auth_service, error = AuthService.new_auth_service(True, None)

        assert auth_service is None
        assert error.messages == ["The roles and access permissions cannot be None."]

    def test_unknown_role_key_is_rejected(self):
        auth_service, error = AuthService.new_auth_service(True, {"superuser": True})

        assert auth_service is None
        assert error.messages == ["'superuser' is not a defined authorization role."]

    def test_none_roles_deny_everything(self):
        auth_service = AuthService(True, None)

        assert auth_service.is_authorized(AuthorizationRole.ADMIN) is False

    def test_repr_lists_granted_roles(self, unauthorized_auth_service):
        assert repr(unauthorized_auth_service) == "<AuthService(is_authenticated=True, granted=['GENERAL'])>"


@pytest.mark.parametrize(
    "role, value, description",
    [
        (AuthorizationRole.UNDEFINED, 0, "Undefined"),
        (AuthorizationRole.NONE, 1, "None"),
        (AuthorizationRole.ADMIN, 2, "Admin"),
        (AuthorizationRole.ACCOUNTING, 3, "Accounting"),
        (AuthorizationRole.GENERAL, 4, "General"),
    ],
)
def test_authorization_roles(role, value, description):
    assert role.value == value
    assert role.description == description
