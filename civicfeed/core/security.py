# File: civicfeed/core/security.py
# Login is mocked: the frontend sends the signed-in user's id in X-User-Id.
from typing import Optional

from fastapi import Depends, Header, HTTPException, status

from civicfeed.db.session import get_store
from civicfeed.db.store import EntityKind, MemoryStore
from civicfeed.models.user import User, UserRole

USER_HEADER = "X-User-Id"


def get_actor_id(x_user_id: Optional[str] = Header(default=None, alias=USER_HEADER)) -> Optional[str]:
    return (x_user_id or "").strip() or None


def get_optional_user(actor_id: Optional[str] = Depends(get_actor_id),
                      store: MemoryStore = Depends(get_store)) -> Optional[User]:
    if not actor_id:
        return None
    return store.get(EntityKind.user, actor_id)


def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return user


def require_role(*roles):
    role_values = [r.value if isinstance(r, UserRole) else r for r in roles]
    def _dep(user: User = Depends(get_current_user)):
        if user.role.value not in role_values:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="forbidden")
        return user
    return _dep
