"""JWT access tokens (ES256).

The API authenticates every protected request with a short-lived bearer
token whose ``sub`` is the user's UUID and ``roles`` its platform role.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta

import jwt
from cryptography.hazmat.primitives.asymmetric import ec

from learnroute.core.config import SETTINGS

# Ephemeral key per process: tokens do not survive a restart.
# TODO: load the signing key from PRIVATE_KEY_PEM so replicas share it.
_private_key = ec.generate_private_key(ec.SECP256R1())
_public_key = _private_key.public_key()

ALGORITHM = "ES256"
ISSUER = "learnroute"
AUDIENCE = "learnroute-api"


def create_access_token(
    *,
    sub: str,
    roles: list[str] | None = None,
    ttl_minutes: int | None = None,
) -> str:
    now = datetime.now(UTC)
    ttl = ttl_minutes if ttl_minutes is not None else SETTINGS.access_token_ttl_min
    payload = {
        "sub": sub,
        "iss": ISSUER,
        "aud": AUDIENCE,
        "exp": now + timedelta(minutes=ttl),
        "iat": now,
        "jti": str(uuid.uuid4()),
        "roles": roles or ["user"],
    }
    return jwt.encode(payload, _private_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Verify signature and claims, return the payload.

    Pins the algorithm to ES256.  Raises jwt.ExpiredSignatureError or
    jwt.InvalidTokenError on failure.
    """
    return jwt.decode(
        token,
        _public_key,
        algorithms=[ALGORITHM],
        issuer=ISSUER,
        audience=AUDIENCE,
        options={"require": ["sub", "exp", "iat", "jti"]},
    )
