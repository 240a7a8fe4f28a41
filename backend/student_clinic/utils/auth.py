from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt

from ..config import settings


def verify_token(token: str) -> Dict[str, Any]:
    """Decode and verify an access token issued by the identity provider.

    Raises ``jose.JWTError`` (or a subclass such as ``ExpiredSignatureError``)
    when the signature, expiry or audience does not check out.
    """
    return jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[settings.jwt_algorithm],
        audience=settings.jwt_audience or None,
        options={"verify_aud": bool(settings.jwt_audience)},
    )


def create_access_token(
    subject: str,
    email: Optional[str] = None,
    name: Optional[str] = None,
    role: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Mint a token shaped like the identity provider's, for local development and tests."""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    claims: Dict[str, Any] = {
        "sub": subject,
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
        "user_metadata": {"name": name, "role": role},
    }
    if email:
        claims["email"] = email
    if settings.jwt_audience:
        claims["aud"] = settings.jwt_audience
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)
