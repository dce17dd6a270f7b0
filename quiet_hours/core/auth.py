from dataclasses import dataclass
from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from quiet_hours.core.config import settings
from quiet_hours.domain.exceptions import InvalidToken


# Tokens are issued by the hosted auth provider; this service only verifies them.
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthenticatedUser:
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None


def decode_access_token(token: str) -> AuthenticatedUser:
    options = {"verify_aud": bool(settings.auth.audience)}
    try:
        payload: dict = jwt.decode(
            token,
            settings.auth.jwt_secret,
            algorithms=[settings.auth.algorithm],
            audience=settings.auth.audience or None,
            options=options,
        )
    except JWTError:
        raise InvalidToken()

    user_id: str | None = payload.get("sub")
    if not user_id:
        raise InvalidToken()

    metadata = payload.get("user_metadata") or {}
    return AuthenticatedUser(
        id=user_id,
        email=payload.get("email"),
        full_name=metadata.get("full_name") or metadata.get("name"),
        avatar_url=metadata.get("avatar_url"),
    )


async def get_current_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> AuthenticatedUser:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise InvalidToken("Not authenticated")
    return decode_access_token(credentials.credentials)
