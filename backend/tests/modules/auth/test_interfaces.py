from modules.auth.identity import IIdentityProvider, InMemoryIdentityProvider
from modules.auth.interfaces import IAuthService
from modules.auth.service import AuthService


class TestAuthInterface:
    def test_interface_methods_exist(self):
        """IAuthService should define required methods."""
        methods = [
            "validate_token",
            "resolve_role",
            "authenticate",
            "register",
            "login",
            "request_password_reset",
            "get_profile",
            "update_profile",
            "change_password",
        ]
        for method in methods:
            assert hasattr(IAuthService, method)
            assert callable(getattr(AuthService, method))

    def test_interface_is_runtime_checkable(self):
        """IAuthService should be decorated with @runtime_checkable."""
        assert hasattr(IAuthService, "__protocol_attrs__") or hasattr(
            IAuthService, "_is_protocol"
        )


class TestIdentityProviderInterface:
    def test_in_memory_provider_satisfies_protocol(self):
        assert isinstance(InMemoryIdentityProvider("secret"), IIdentityProvider)
