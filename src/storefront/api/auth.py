"""Request authentication: resolves the bearer token through the auth port."""

from fastapi import Header, HTTPException

from storefront.identity import get_auth_service
from storefront.identity.port import AuthenticatedUser
from storefront.utils.logging import add_context


async def current_user(authorization: str | None = Header(default=None)) -> AuthenticatedUser:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="Missing bearer token")

    user = get_auth_service().resolve(authorization[7:].strip())
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    add_context(user_id=user.user_id)
    return user


async def verified_admin(authorization: str | None = Header(default=None)) -> AuthenticatedUser:
    """Admin screens are only reachable with a verified email."""
    user = await current_user(authorization)
    if not user.email_verified:
        raise HTTPException(status_code=403, detail="Email address is not verified")
    return user
