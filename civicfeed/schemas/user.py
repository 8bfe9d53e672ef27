from datetime import datetime
from pydantic import AliasChoices, EmailStr, Field
from civicfeed.models.user import DEFAULT_CREDIBILITY, UserRole
from civicfeed.schemas.base import CamelModel

class UserCreate(CamelModel):
    username: str = Field(min_length=1, max_length=64)
    email: EmailStr
    role: UserRole = UserRole.user
    credibility_score: int = Field(default=DEFAULT_CREDIBILITY, ge=0, le=10)
    external_auth_id: str = Field(
        min_length=1,
        validation_alias=AliasChoices("externalAuthId", "firebaseUid", "external_auth_id"),
    )

class UserOut(CamelModel):
    id: str
    username: str
    email: str
    role: UserRole
    credibility_score: int
    external_auth_id: str
    created_at: datetime | None = None
