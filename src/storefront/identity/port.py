"""Authentication port.

Login, registration and password reset live in the hosted auth service. The
storefront only needs to turn a bearer token into a stable user id and to know
whether the user's email is verified.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class AuthenticatedUser:
    user_id: str
    email_verified: bool = False


class AuthService(ABC):
    """Abstract authentication interface."""

    @abstractmethod
    def resolve(self, token: str) -> AuthenticatedUser | None:
        """Return the user the token belongs to, or None if it is unknown."""
        ...
