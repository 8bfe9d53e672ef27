# civicfeed/services/views.py
"""Read models: issues joined with their reporter / technician, dashboard stats."""
from collections import Counter
from datetime import datetime, timezone
from typing import Optional

from civicfeed.db.store import EntityKind, MemoryStore
from civicfeed.models.issue import IssueSeverity, IssueStatus, MaintenanceIssue
from civicfeed.models.technician import Technician
from civicfeed.models.user import User, UserRole
from civicfeed.schemas.issue import IssueStats, IssueView
from civicfeed.schemas.technician import TechnicianOut, TechnicianWorkload
from civicfeed.schemas.user import UserOut
from civicfeed.services.lifecycle import get_issue

UNKNOWN_USERNAME = "Unknown User"


def placeholder_reporter(reporter_id: str) -> User:
    return User(
        id=reporter_id,
        username=UNKNOWN_USERNAME,
        email="unknown@maintain.ai",
        role=UserRole.user,
        credibility_score=0,
        external_auth_id="unknown",
        created_at=datetime.now(timezone.utc),
    )


def _newest_first(issues: list[MaintenanceIssue]) -> list[MaintenanceIssue]:
    # sorted() is stable with reverse=True, so equal timestamps keep insertion order
    return sorted(issues, key=lambda i: i.created_at, reverse=True)


def _assemble(issue: MaintenanceIssue, users: dict[str, User],
              technicians: Optional[dict[str, Technician]] = None) -> IssueView:
    out = IssueView.model_validate(issue)
    reporter = users.get(issue.reporter_id) or placeholder_reporter(issue.reporter_id)
    out.reporter = UserOut.model_validate(reporter)
    if technicians is not None and issue.assigned_technician_id:
        tech = technicians.get(issue.assigned_technician_id)
        out.technician = TechnicianOut.model_validate(tech) if tech else None
    return out


def _snapshot(store: MemoryStore):
    # one lock hold so issues, users and technicians come from the same moment
    with store.lock:
        issues = store.list_all(EntityKind.issue)
        users = {u.id: u for u in store.list_all(EntityKind.user)}
        technicians = {t.id: t for t in store.list_all(EntityKind.technician)}
    return issues, users, technicians


def list_issues_with_reporter(store: MemoryStore) -> list[IssueView]:
    issues, users, _ = _snapshot(store)
    return [_assemble(i, users) for i in _newest_first(issues)]


def list_issues_for_user(store: MemoryStore, user_id: str) -> list[IssueView]:
    issues, users, technicians = _snapshot(store)
    mine = [i for i in issues if i.reporter_id == user_id]
    return [_assemble(i, users, technicians) for i in _newest_first(mine)]


def get_issue_with_reporter(store: MemoryStore, issue_id: str) -> IssueView:
    with store.lock:
        issue = get_issue(store, issue_id)
        users = {u.id: u for u in store.list_all(EntityKind.user)}
        technicians = {t.id: t for t in store.list_all(EntityKind.technician)}
    return _assemble(issue, users, technicians)


def issue_stats(store: MemoryStore) -> IssueStats:
    issues, _, technicians = _snapshot(store)
    by_status = Counter(i.status for i in issues)
    by_severity = Counter(i.severity for i in issues)
    by_category = Counter((i.category or "unknown").lower() for i in issues)
    total = len(issues)
    resolved = by_status[IssueStatus.resolved]

    workload = []
    for tech in technicians.values():
        assigned = [i for i in issues if i.assigned_technician_id == tech.id]
        done = sum(1 for i in assigned if i.status == IssueStatus.resolved)
        workload.append(TechnicianWorkload(
            technician_id=tech.id,
            name=tech.name,
            status=tech.status,
            assigned=len(assigned),
            resolved=done,
            effectiveness=round(done / len(assigned) * 100) if assigned else 0,
        ))

    return IssueStats(
        total=total,
        open=by_status[IssueStatus.open],
        assigned=by_status[IssueStatus.assigned],
        in_progress=by_status[IssueStatus.in_progress],
        resolved=resolved,
        critical=by_severity[IssueSeverity.critical],
        high=by_severity[IssueSeverity.high],
        completion_rate=round(resolved / total * 100) if total else 0,
        by_category=dict(by_category.most_common()),
        technicians=workload,
    )
