# File: civicfeed/models/user.py
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import Enum as PyEnum

class UserRole(str, PyEnum):
    user = "user"
    admin = "admin"

DEFAULT_CREDIBILITY = 7

@dataclass
class User:
    id: str
    username: str
    email: str
    external_auth_id: str
    created_at: datetime
    role: UserRole = UserRole.user
    credibility_score: int = DEFAULT_CREDIBILITY
