# civicfeed/services/users.py
import logging
from typing import Optional

from civicfeed.core.errors import NotFound, ValidationError
from civicfeed.db.store import EntityKind, MemoryStore, new_id
from civicfeed.models.user import User
from civicfeed.schemas.user import UserCreate

logger = logging.getLogger("civicfeed.users")

UNIQUE_FIELDS = (
    ("username", "username"),
    ("email", "email"),
    ("external_auth_id", "externalAuthId"),
)


def create_user(store: MemoryStore, data: UserCreate) -> User:
    with store.lock:
        existing = store.list_all(EntityKind.user)
        errors = []
        for attr, wire_name in UNIQUE_FIELDS:
            value = getattr(data, attr)
            if any(getattr(u, attr) == value for u in existing):
                errors.append({"field": wire_name, "message": f"{wire_name} already in use"})
        if errors:
            raise ValidationError("Invalid user data", errors=errors)

        user = User(
            id=new_id(),
            username=data.username,
            email=str(data.email),
            role=data.role,
            credibility_score=data.credibility_score,
            external_auth_id=data.external_auth_id,
            created_at=store.now(),
        )
        store.put(EntityKind.user, user)
    logger.info(f"Registered user {user.username} ({user.id})")
    return user


def get_user(store: MemoryStore, user_id: str) -> User:
    user = store.get(EntityKind.user, user_id)
    if not user:
        raise NotFound("User not found")
    return user


def find_by_username(store: MemoryStore, username: str) -> Optional[User]:
    return store.find(EntityKind.user, lambda u: u.username == username)


def find_by_external_auth_id(store: MemoryStore, external_auth_id: str) -> Optional[User]:
    return store.find(EntityKind.user, lambda u: u.external_auth_id == external_auth_id)
