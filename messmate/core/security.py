"""
Bearer token checks.

Tokens are issued elsewhere and signed with the shared SECRET_KEY. The only
thing the ledger needs from one is the actor id in ``sub``; the group is
looked up from that id, never read from the token.
"""

from jose import JWTError, jwt

from messmate.config import settings
from messmate.core.exceptions import UnauthorizedException

ALGORITHM = "HS256"

# Claims every token must carry, with the message used when one is missing
REQUIRED_CLAIMS = {
    "exp": "Token missing expiration",
    "sub": "Token missing user identifier",
}


def decode_access_token(token: str) -> dict:
    """
    Verify signature and expiry and return the claims.

    Raises:
        UnauthorizedException: If the token is malformed, expired, badly
            signed or lacks a required claim
    """
    try:
        claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        raise UnauthorizedException(f"Invalid token: {e}") from e

    for claim, message in REQUIRED_CLAIMS.items():
        if claims.get(claim) is None:
            raise UnauthorizedException(message)
    return claims


def actor_id_from_token(token: str) -> str:
    """Actor id (``sub``) of a verified token"""
    return str(decode_access_token(token)["sub"])
