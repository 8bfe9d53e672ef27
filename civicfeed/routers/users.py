# File: civicfeed/routers/users.py
from fastapi import APIRouter, Depends
from civicfeed.core.errors import NotFound
from civicfeed.db.session import get_store
from civicfeed.db.store import MemoryStore
from civicfeed.schemas.user import UserCreate, UserOut
from civicfeed.services import users

router = APIRouter(prefix="/api/users", tags=["users"])

@router.post("", response_model=UserOut, status_code=201)
def create_user(body: UserCreate, store: MemoryStore = Depends(get_store)):
    return users.create_user(store, body)

@router.get("/username/{username}", response_model=UserOut)
def get_by_username(username: str, store: MemoryStore = Depends(get_store)):
    user = users.find_by_username(store, username)
    if not user:
        raise NotFound("User not found")
    return user

@router.get("/firebase/{uid}", response_model=UserOut)
def get_by_external_auth_id(uid: str, store: MemoryStore = Depends(get_store)):
    user = users.find_by_external_auth_id(store, uid)
    if not user:
        raise NotFound("User not found")
    return user

@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: str, store: MemoryStore = Depends(get_store)):
    return users.get_user(store, user_id)
