from pydantic import BaseModel
#allows fields to be None
from typing import Optional

#Identity resolved from the bearer token and handed to every operation
class CurrentUser(BaseModel):
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    role: str = "student"

#profile cached in the key/value overlay under "user:<id>"
class UserProfile(CurrentUser):
    created_at: str


class UserProfileEnvelope(BaseModel):
    success: bool = True
    user: UserProfile
