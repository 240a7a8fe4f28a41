from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.auth import CurrentUser, UserProfile, UserProfileEnvelope
from ..services import kv_store
from ..utils.deps import get_current_user, profile_key

#Sign-up and sign-in are handled by the hosted identity provider; this only reads.
router = APIRouter(prefix="/auth", tags=["authentication"])

@router.get("/me", response_model=UserProfileEnvelope)
def get_current_user_profile(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Get current user profile."""
    profile = kv_store.get(db, profile_key(current_user.id))
    return UserProfileEnvelope(user=UserProfile(**profile))
