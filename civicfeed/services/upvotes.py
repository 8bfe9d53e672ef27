# civicfeed/services/upvotes.py
import logging

from civicfeed.core.errors import NotFound, ValidationError
from civicfeed.db.store import EntityKind, MemoryStore

logger = logging.getLogger("civicfeed.upvotes")


def toggle_upvote(store: MemoryStore, issue_id: str, user_id: str) -> dict:
    """Flip ``user_id``'s vote on the issue and return the post-toggle state.

    The voter set is the source of truth; ``issue.upvote_count`` is rewritten
    from its size on every toggle, inside the store lock, so concurrent voters
    cannot lose each other's update.
    """
    if not user_id:
        raise ValidationError("User ID required", field="userId")

    with store.lock:
        issue = store.get(EntityKind.issue, issue_id)
        if not issue:
            raise NotFound("Issue not found")

        voters = store.voters(issue_id)
        if user_id in voters:
            voters.discard(user_id)
            upvoted = False
        else:
            voters.add(user_id)
            upvoted = True
        store.set_voters(issue_id, voters)

        issue.upvote_count = len(voters)
        store.put(EntityKind.issue, issue)

    logger.debug(f"Upvote toggle issue={issue_id} user={user_id} upvoted={upvoted} count={len(voters)}")
    return {"upvoted": upvoted, "new_count": len(voters)}
