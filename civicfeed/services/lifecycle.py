# File: civicfeed/services/lifecycle.py
"""Issue lifecycle: create, update, delete, status state machine, AI merge.

Status workflow::

    open -> assigned -> in_progress -> resolved

Regular callers may only take the next step. An admin may resolve from any
state, and with ``force`` may make any other move that does not leave
``resolved``, which is terminal.
"""
import logging
from typing import Any, Optional

from civicfeed.core.errors import InvalidTransition, NotFound, ValidationError
from civicfeed.db.store import EntityKind, MemoryStore, new_id
from civicfeed.models.issue import IssueSeverity, IssueStatus, MaintenanceIssue
from civicfeed.models.user import User, UserRole
from civicfeed.schemas.issue import IssueCreate, IssueUpdate

logger = logging.getLogger("civicfeed.lifecycle")

STATUS_ORDER = [
    IssueStatus.open,
    IssueStatus.assigned,
    IssueStatus.in_progress,
    IssueStatus.resolved,
]

# fields PATCH may set to null; the rest keep their value when null is sent
NULLABLE_FIELDS = {"location", "assigned_technician_id"}


def is_admin(actor: Optional[User]) -> bool:
    return bool(actor and actor.role == UserRole.admin)


def check_transition(current: IssueStatus, target: IssueStatus,
                     admin: bool = False, force: bool = False) -> None:
    if current == target:
        return
    if current == IssueStatus.resolved:
        raise InvalidTransition(current.value, target.value, "Resolved issues cannot be reopened")
    if admin and (target == IssueStatus.resolved or force):
        return
    if STATUS_ORDER.index(target) == STATUS_ORDER.index(current) + 1:
        return
    raise InvalidTransition(current.value, target.value)


def apply_analysis(issue: MaintenanceIssue, analysis: dict[str, Any]) -> MaintenanceIssue:
    """Copy the classifier's category/severity onto the issue and keep the full result."""
    category = (analysis.get("category") or "").strip()
    if category:
        issue.category = category
    severity = str(analysis.get("severity") or "").strip().lower()
    if severity in IssueSeverity._value2member_map_:
        issue.severity = IssueSeverity(severity)
    issue.ai_analysis = dict(analysis)
    return issue


def get_issue(store: MemoryStore, issue_id: str) -> MaintenanceIssue:
    issue = store.get(EntityKind.issue, issue_id)
    if not issue:
        raise NotFound("Issue not found")
    return issue


def create_issue(store: MemoryStore, data: IssueCreate) -> MaintenanceIssue:
    with store.lock:
        if not store.exists(EntityKind.user, data.reporter_id):
            raise ValidationError("Reporter does not exist", field="reporterId")

        now = store.now()
        issue = MaintenanceIssue(
            id=new_id(),
            title=data.title.strip(),
            description=data.description,
            category=data.category,
            severity=data.severity,
            reporter_id=data.reporter_id,
            location=data.location or None,
            image_urls=list(data.image_urls),
            status=IssueStatus.open,
            progress=0,
            upvote_count=0,
            created_at=now,
            updated_at=now,
        )
        if data.ai_analysis:
            apply_analysis(issue, data.ai_analysis.model_dump(by_alias=True))
        store.put(EntityKind.issue, issue)

    logger.info(f"Issue {issue.id} created by {issue.reporter_id} ({issue.category}/{issue.severity.value})")
    return issue


def update_issue(store: MemoryStore, issue_id: str, changes: IssueUpdate,
                 actor: Optional[User] = None) -> MaintenanceIssue:
    fields = changes.model_dump(exclude_unset=True, exclude={"force", "status", "ai_analysis"})
    target = changes.status if "status" in changes.model_fields_set else None

    with store.lock:
        issue = get_issue(store, issue_id)

        tech_id = fields.get("assigned_technician_id")
        if tech_id is not None and not store.exists(EntityKind.technician, tech_id):
            raise ValidationError("Technician does not exist", field="assignedTechnicianId")

        progress = fields.get("progress")
        if issue.status == IssueStatus.resolved and progress is not None and progress != issue.progress:
            raise ValidationError("Progress of a resolved issue cannot change", field="progress")

        # analysis first so explicit category/severity in the same patch win
        if changes.ai_analysis is not None:
            apply_analysis(issue, changes.ai_analysis.model_dump(by_alias=True))

        for key, value in fields.items():
            if value is None and key not in NULLABLE_FIELDS:
                continue
            setattr(issue, key, value)

        if target is not None and target != issue.status:
            check_transition(issue.status, target, admin=is_admin(actor), force=changes.force)
            if target == IssueStatus.assigned and not issue.assigned_technician_id:
                raise ValidationError(
                    "Issue must have a technician before it is marked assigned",
                    field="assignedTechnicianId",
                )
            logger.info(f"Issue {issue.id}: {issue.status.value} -> {target.value}")
            issue.status = target
            if target == IssueStatus.resolved and progress is None:
                issue.progress = 100

        issue.updated_at = store.now()
        store.put(EntityKind.issue, issue)
    return issue


def delete_issue(store: MemoryStore, issue_id: str) -> bool:
    """Hard delete; the issue's comments and upvotes go with it."""
    with store.lock:
        if not store.delete(EntityKind.issue, issue_id):
            return False
        for comment in store.list_all(EntityKind.comment):
            if comment.issue_id == issue_id:
                store.delete(EntityKind.comment, comment.id)
        store.drop_voters(issue_id)
    logger.info(f"Issue {issue_id} deleted")
    return True


def classify_issue(store: MemoryStore, classifier, issue_id: str,
                   image: Optional[str] = None) -> MaintenanceIssue:
    """Run the classifier on an existing issue and merge the result."""
    description = get_issue(store, issue_id).description
    # network call stays outside the lock
    analysis = classifier.analyze(description, image)

    with store.lock:
        issue = get_issue(store, issue_id)
        apply_analysis(issue, analysis.model_dump(by_alias=True))
        issue.updated_at = store.now()
        store.put(EntityKind.issue, issue)
    return issue
