"""Authentication service factory."""

from storefront.identity.fake_adapter import FakeAuthService
from storefront.identity.port import AuthService

_current_auth: AuthService | None = None


def get_auth_service() -> AuthService:
    """Return the current auth service. Defaults to FakeAuthService."""
    global _current_auth
    if _current_auth is None:
        _current_auth = FakeAuthService()
    return _current_auth


def set_auth_service(service: AuthService) -> None:
    """Override the active auth service (useful for tests)."""
    global _current_auth
    _current_auth = service


def reset_auth_service() -> None:
    """Reset to default auth service."""
    global _current_auth
    _current_auth = None
