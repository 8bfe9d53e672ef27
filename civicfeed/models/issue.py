# File: civicfeed/models/issue.py
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum as PyEnum
from typing import Any

class IssueStatus(str, PyEnum):
    open = "open"
    assigned = "assigned"
    in_progress = "in_progress"
    resolved = "resolved"

class IssueSeverity(str, PyEnum):
    low = "low"
    medium = "medium"
    high = "high"
    critical = "critical"

@dataclass
class MaintenanceIssue:
    id: str
    title: str
    description: str
    category: str
    severity: IssueSeverity
    reporter_id: str
    created_at: datetime
    updated_at: datetime
    status: IssueStatus = IssueStatus.open
    progress: int = 0
    location: str | None = None
    image_urls: list[str] = field(default_factory=list)
    assigned_technician_id: str | None = None
    # classifier output as received, camelCase keys
    ai_analysis: dict[str, Any] | None = None
    upvote_count: int = 0
