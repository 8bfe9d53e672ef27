# File: civicfeed/models/comment.py
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime

@dataclass
class Comment:
    id: str
    content: str
    issue_id: str
    user_id: str
    created_at: datetime
