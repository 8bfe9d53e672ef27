"""Fixed demo dataset restored by ``MemoryStore.reset()`` and ``POST /api/reset-data``."""
from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

from civicfeed.models.issue import IssueSeverity, IssueStatus, MaintenanceIssue
from civicfeed.models.technician import Technician, TechnicianStatus
from civicfeed.models.user import User, UserRole

if TYPE_CHECKING:
    from civicfeed.db.store import MemoryStore

SEED_USERS = 2
SEED_TECHNICIANS = 3
SEED_ISSUES = 3


def load_seed(store: "MemoryStore") -> None:
    from civicfeed.db.store import EntityKind, new_id

    now = store.now()

    admin = User(
        id=new_id(),
        username="admin",
        email="admin@maintain.ai",
        role=UserRole.admin,
        credibility_score=9,
        external_auth_id="admin-firebase-uid",
        created_at=now,
    )
    citizen = User(
        id=new_id(),
        username="user",
        email="user@maintain.ai",
        role=UserRole.user,
        credibility_score=7,
        external_auth_id="user-firebase-uid",
        created_at=now,
    )
    for u in (admin, citizen):
        store.put(EntityKind.user, u)

    techs = [
        Technician(id=new_id(), name="John Smith", specialty="Plumbing", status=TechnicianStatus.available,
                   phone="+1-555-0101", email="john@maintain.ai", created_at=now),
        Technician(id=new_id(), name="Lisa Garcia", specialty="Electrical", status=TechnicianStatus.busy,
                   phone="+1-555-0102", email="lisa@maintain.ai", created_at=now),
        Technician(id=new_id(), name="Tom Wilson", specialty="General", status=TechnicianStatus.available,
                   phone="+1-555-0103", email="tom@maintain.ai", created_at=now),
    ]
    for t in techs:
        store.put(EntityKind.technician, t)

    leak = MaintenanceIssue(
        id=new_id(),
        title="Water leak in Building A hallway",
        description=(
            "Major water leak in the hallway near Room 315. Water is spreading rapidly "
            "and affecting multiple units. Urgent attention needed!"
        ),
        category="plumbing",
        severity=IssueSeverity.high,
        status=IssueStatus.in_progress,
        progress=75,
        location="Building A, Floor 3",
        image_urls=["/sample-images/Water-leaking-into-hallway.jpg"],
        reporter_id=citizen.id,
        assigned_technician_id=techs[0].id,
        ai_analysis={
            "domain": "Plumbing",
            "category": "Plumbing Emergency",
            "urgency": "URGENT",
            "priority": "HIGH",
            "severity": "High",
            "confidence": 0.9,
            "reasoning": (
                "Water damage can spread quickly and cause structural damage. Immediate response "
                "required to prevent further property damage and potential safety hazards."
            ),
            "estimatedCost": "$500-2000",
            "timeToResolve": "2-8 hours",
            "riskLevel": "HIGH",
        },
        created_at=now - timedelta(hours=2),
        updated_at=now,
    )
    lights = MaintenanceIssue(
        id=new_id(),
        title="Flickering lights in library",
        description=(
            "Flickering lights in the main reading area. Affecting multiple study areas "
            "and causing distraction for students."
        ),
        category="electrical",
        severity=IssueSeverity.medium,
        status=IssueStatus.assigned,
        progress=30,
        location="Library Building",
        image_urls=["/sample-images/flickering-light-bulb.jpg"],
        reporter_id=admin.id,
        assigned_technician_id=techs[1].id,
        ai_analysis={
            "domain": "Electrical",
            "category": "Electrical Maintenance",
            "urgency": "STANDARD",
            "priority": "MEDIUM",
            "severity": "Medium",
            "confidence": 0.85,
            "reasoning": (
                "Electrical issues affecting productivity but not immediately dangerous. Should be "
                "scheduled within 24 hours to prevent potential disruption to daily operations."
            ),
            "estimatedCost": "$100-500",
            "timeToResolve": "1-2 days",
            "riskLevel": "MEDIUM",
        },
        created_at=now - timedelta(hours=4),
        updated_at=now,
    )
    paint = MaintenanceIssue(
        id=new_id(),
        title="Paint peeling in cafeteria",
        description="Paint peeling on the wall near the entrance. Not urgent but affects the appearance of the space.",
        category="cosmetic",
        severity=IssueSeverity.low,
        status=IssueStatus.open,
        progress=10,
        location="Cafeteria",
        image_urls=["/sample-images/paint-peeling-on-wall.jpg"],
        reporter_id=citizen.id,
        ai_analysis={
            "domain": "General Maintenance",
            "category": "Cosmetic/Paint",
            "urgency": "ROUTINE",
            "priority": "LOW",
            "severity": "Low",
            "confidence": 0.8,
            "reasoning": (
                "Cosmetic issue that can be scheduled for routine maintenance within 2 weeks. "
                "Affects appearance but poses no immediate safety concerns."
            ),
            "estimatedCost": "$50-200",
            "timeToResolve": "1-2 weeks",
            "riskLevel": "LOW",
        },
        created_at=now - timedelta(days=1),
        updated_at=now,
    )

    # upvote_count must match the seeded voter sets
    seeded_votes = {
        leak.id: {citizen.id, admin.id},
        lights.id: {citizen.id},
        paint.id: set(),
    }
    for issue in (leak, lights, paint):
        voters = seeded_votes[issue.id]
        issue.upvote_count = len(voters)
        store.put(EntityKind.issue, issue)
        store.set_voters(issue.id, voters)
