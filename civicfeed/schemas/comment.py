from datetime import datetime
from typing import Optional
from pydantic import Field
from civicfeed.schemas.base import CamelModel

class CommentCreate(CamelModel):
    content: str = Field(min_length=1, max_length=4000)
    user_id: Optional[str] = None

class CommentOut(CamelModel):
    id: str
    content: str
    issue_id: str
    user_id: str
    created_at: datetime
