from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..app_logger import get_logger
from ..database import get_db
from ..exceptions import UnauthorizedError
from ..schemas.auth import CurrentUser
from ..services import kv_store
from .auth import verify_token

log = get_logger("auth")

#auto_error is off so a missing header gets our {"error": ...} body instead of FastAPI's
bearer_scheme = HTTPBearer(auto_error=False)


def profile_key(user_id: str) -> str:
    return f"user:{user_id}"


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> CurrentUser:
    """Resolve the bearer token to the calling user; 401 when absent or invalid."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise UnauthorizedError()

    try:
        payload = verify_token(credentials.credentials)
    except JWTError as exc:
        log.info("Rejected bearer token: %s", exc)
        raise UnauthorizedError()

    subject = payload.get("sub")
    if not subject:
        raise UnauthorizedError()

    metadata = payload.get("user_metadata")
    if not isinstance(metadata, dict):
        metadata = {}
    user = CurrentUser(
        id=str(subject),
        email=payload.get("email"),
        name=metadata.get("name"),
        role=metadata.get("role") or "student",
    )

    _sync_profile(db, user)
    return user


def _sync_profile(db: Session, user: CurrentUser) -> None:
    """Cache the profile under "user:<id>"; rewritten when the token's claims change.

    ``created_at`` is kept from the first write.
    """
    key = profile_key(user.id)
    stored = kv_store.get(db, key)
    claims = user.model_dump()
    if stored is not None and all(stored.get(field) == value for field, value in claims.items()):
        return

    created_at = (stored or {}).get("created_at") or datetime.now(timezone.utc).isoformat()
    try:
        kv_store.put(db, key, {**claims, "created_at": created_at})
    except IntegrityError:
        # A parallel first request inserted the same key
        db.rollback()
        log.info("Profile for user %s was stored concurrently", user.id)
        return

    if stored is None:
        log.info("Stored profile for new user %s", user.id)
    else:
        log.info("Refreshed profile for user %s", user.id)
