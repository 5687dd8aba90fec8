"""Fake authentication service for development and testing.

Tokens are registered explicitly; unregistered tokens are rejected.
"""

from storefront.identity.port import AuthenticatedUser, AuthService


class FakeAuthService(AuthService):
    def __init__(self) -> None:
        self._users: dict[str, AuthenticatedUser] = {}

    def register(self, token: str, user_id: str, email_verified: bool = True) -> AuthenticatedUser:
        user = AuthenticatedUser(user_id=user_id, email_verified=email_verified)
        self._users[token] = user
        return user

    def revoke(self, token: str) -> None:
        self._users.pop(token, None)

    def resolve(self, token: str) -> AuthenticatedUser | None:
        return self._users.get(token)
