"""
Bearer-token dependencies for the recommendation routes.

POST /api/recommend accepts anonymous callers, so it resolves the caller with
get_optional_user (None when there is no usable token). The history endpoint
only makes sense for a signed-in user and uses get_authenticated_user, which
answers 401.

Tokens are Supabase Auth access tokens signed with the project's ES256 key;
public keys are fetched from the project's JWKS endpoint and cached.
"""

import logging
from dataclasses import dataclass
from typing import Annotated, Optional

from fastapi import Header, HTTPException, status
from jwt import PyJWKClient, decode
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError, PyJWKClientError

from prompt_recommender.config import settings

logger = logging.getLogger(__name__)

TOKEN_ALGORITHMS = ["ES256"]
TOKEN_AUDIENCE = "authenticated"

_jwks_client: Optional[PyJWKClient] = None


@dataclass
class AuthenticatedUser:
    """A verified caller: user_id is the token's 'sub', access_token scopes Supabase RLS."""
    user_id: str
    access_token: str


def get_jwks_client() -> PyJWKClient:
    """Return the cached JWKS client, creating it on first use."""
    global _jwks_client

    if _jwks_client is not None:
        return _jwks_client

    if not settings.SUPABASE_JWKS_URL:
        raise ValueError("SUPABASE_URL is not set; token signatures cannot be checked")

    logger.info(f"Creating JWKS client for {settings.SUPABASE_JWKS_URL}")
    _jwks_client = PyJWKClient(settings.SUPABASE_JWKS_URL, cache_keys=True, max_cached_keys=16)
    return _jwks_client


def _unauthorized(error: str, details: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"error": error, "details": details}
    )


def _extract_bearer_token(authorization: Optional[str]) -> str:
    """Return the token from an "Authorization: Bearer <token>" header."""
    if not authorization:
        raise _unauthorized("unauthorized", "Missing Authorization header")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token or " " in token:
        raise _unauthorized("unauthorized", "Invalid Authorization header format")

    return token


def verify_access_token(token: str) -> str:
    """
    Check signature, expiry, audience, and issuer, then return the user_id.

    Raises:
        HTTPException: 401 with error token_expired, jwks_error,
            invalid_token, or unauthorized
    """
    issuer = f"{settings.SUPABASE_URL.rstrip('/')}/auth/v1"

    try:
        signing_key = get_jwks_client().get_signing_key_from_jwt(token)
        claims = decode(
            token,
            signing_key.key,
            algorithms=TOKEN_ALGORITHMS,
            audience=TOKEN_AUDIENCE,
            issuer=issuer,
            options={"require": ["exp", "sub"]},
        )
    except ExpiredSignatureError:
        logger.info("Rejected expired access token")
        raise _unauthorized("token_expired", "Authentication token has expired")
    except PyJWKClientError as e:
        logger.error(f"Could not load signing key: {e}")
        raise _unauthorized("jwks_error", "Unable to verify token signature")
    except InvalidTokenError as e:
        logger.info(f"Rejected access token: {e}")
        raise _unauthorized("invalid_token", "Invalid authentication token")
    except Exception as e:
        logger.error(f"Token verification failed: {e}")
        raise _unauthorized("unauthorized", "Token verification failed")

    user_id = claims.get("sub")
    if not user_id:
        raise _unauthorized("unauthorized", "Invalid token: missing user ID")

    return str(user_id)


async def get_authenticated_user(
    authorization: Annotated[Optional[str], Header()] = None
) -> AuthenticatedUser:
    """
    Require a valid Bearer token.

    Raises:
        HTTPException: 401 if the header is missing or the token does not verify
    """
    token = _extract_bearer_token(authorization)
    user_id = verify_access_token(token)
    logger.debug(f"Authenticated user_id={user_id}")
    return AuthenticatedUser(user_id=user_id, access_token=token)


async def get_optional_user(
    authorization: Annotated[Optional[str], Header()] = None
) -> Optional[AuthenticatedUser]:
    """Resolve the caller if the token verifies; anything else is treated as anonymous."""
    if authorization is None or not authorization.strip():
        return None

    try:
        return await get_authenticated_user(authorization)
    except HTTPException as e:
        logger.info(f"Treating request as anonymous ({e.detail['error']})")
        return None
