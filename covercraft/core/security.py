"""
Caller identity for request handlers.

Bearer tokens are JWT access tokens issued by the identity provider. A request
is resolved exactly once into either Authenticated or Anonymous; endpoints
receive that value through FastAPI dependencies and never inspect headers.
"""

from dataclasses import dataclass
from typing import Optional, Union
import logging

import jwt
from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from covercraft.core.config import settings
from covercraft.core.errors import UnauthorizedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Authenticated:
    user_id: str
    email: Optional[str] = None
    provider: Optional[str] = None


@dataclass(frozen=True)
class Anonymous:
    pass


CallerIdentity = Union[Authenticated, Anonymous]
ANONYMOUS = Anonymous()


class TokenVerifier:
    """Validates provider-issued access tokens with a shared signing secret."""

    def __init__(self, secret: str, audience: Optional[str] = None, algorithms: Optional[list[str]] = None):
        self.secret = secret
        self.audience = audience
        self.algorithms = algorithms or ["HS256"]

    def verify(self, token: str) -> Authenticated:
        if not self.secret:
            logger.error("SUPABASE_JWT_SECRET is not configured; rejecting bearer token")
            raise UnauthorizedError("Invalid authentication token")

        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=self.algorithms,
                audience=self.audience,
                options={"require": ["sub", "exp"], "verify_aud": self.audience is not None},
            )
        except jwt.PyJWTError as e:
            logger.info("Rejected bearer token: %s", e)
            raise UnauthorizedError("Invalid authentication token") from e

        app_metadata = claims.get("app_metadata") or {}
        return Authenticated(
            user_id=str(claims["sub"]),
            email=claims.get("email"),
            provider=app_metadata.get("provider"),
        )


def get_token_verifier() -> TokenVerifier:
    return TokenVerifier(
        secret=settings.SUPABASE_JWT_SECRET,
        audience=settings.JWT_AUDIENCE or None,
        algorithms=settings.JWT_ALGORITHMS,
    )


bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> Authenticated:
    """Dependency for routes that require a signed-in caller."""
    if credentials is None:
        raise UnauthorizedError("Missing or invalid authorization header")
    return verifier.verify(credentials.credentials)


def get_optional_caller(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> CallerIdentity:
    """Dependency for routes that also serve anonymous callers.

    A token that fails validation downgrades the caller to anonymous.
    """
    if credentials is None:
        return ANONYMOUS
    try:
        return verifier.verify(credentials.credentials)
    except UnauthorizedError:
        return ANONYMOUS
