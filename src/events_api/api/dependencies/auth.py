"""Request authentication dependency."""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status

from src.events_api.api.dependencies.clients import Issuer
from src.events_api.core.logging import bind_user_context
from src.events_api.core.security import TokenIdentity, identity_from_claims


async def get_current_identity(
    request: Request,
    issuer: Issuer,
    authorization: Annotated[str | None, Header()] = None,
) -> TokenIdentity:
    """Validate the bearer access token and return the caller's identity.

    No header (or not a Bearer one) is 401; a token that is present but
    invalid or expired is 403.
    """
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="You are not authorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    claims = issuer.decode_access(token.strip())
    identity = identity_from_claims(claims) if claims else None
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid token",
        )

    request.state.identity = identity
    bind_user_context(identity.id, identity.email)
    return identity


CurrentIdentity = Annotated[TokenIdentity, Depends(get_current_identity)]
