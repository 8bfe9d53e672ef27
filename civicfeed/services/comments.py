import logging
from typing import Optional

from civicfeed.core.errors import NotFound, ValidationError
from civicfeed.db.store import EntityKind, MemoryStore, new_id
from civicfeed.models.comment import Comment

logger = logging.getLogger("civicfeed.comments")


def list_comments(store: MemoryStore, issue_id: str) -> list[Comment]:
    """Comments on one issue, oldest first. Unknown issue -> empty list."""
    rows = [c for c in store.list_all(EntityKind.comment) if c.issue_id == issue_id]
    return sorted(rows, key=lambda c: c.created_at)


def create_comment(store: MemoryStore, issue_id: str, content: str, user_id: Optional[str]) -> Comment:
    body = (content or "").strip()
    if not body:
        raise ValidationError("Empty comment", field="content")
    if not user_id:
        raise ValidationError("User ID required", field="userId")

    with store.lock:
        if not store.exists(EntityKind.issue, issue_id):
            raise NotFound("Issue not found")
        if not store.exists(EntityKind.user, user_id):
            raise ValidationError("Unknown user", field="userId")
        comment = Comment(
            id=new_id(),
            content=body,
            issue_id=issue_id,
            user_id=user_id,
            created_at=store.now(),
        )
        store.put(EntityKind.comment, comment)
    logger.info(f"Comment {comment.id} added to issue {issue_id} by {user_id}")
    return comment
