"""Bearer token helpers for the identity boundary.

Sessions are issued elsewhere; this service only needs to turn a signed
token into the opaque voter id carried in its ``sub`` claim.
"""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from clip_feed.core.errors import AuthRequired
from clip_feed.core.settings import settings


def create_access_token(voter_id: str, extra_claims: dict[str, str] | None = None) -> str:
    """Create a JWT whose subject is ``voter_id``."""
    to_encode: dict[str, object] = {"sub": voter_id}
    if extra_claims:
        to_encode.update(extra_claims)
    expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = expire
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_voter_id(token: str) -> str:
    """Return the voter id carried by ``token``.

    Raises:
        AuthRequired: If the token is invalid, expired or has no subject.
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as err:
        raise AuthRequired("Could not validate credentials") from err

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        raise AuthRequired("Could not validate credentials")
    return subject
