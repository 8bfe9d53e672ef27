# File: civicfeed/schemas/issue.py
from datetime import datetime
from typing import List, Optional
from pydantic import Field, field_validator

from civicfeed.models.issue import IssueSeverity, IssueStatus
from civicfeed.schemas.base import CamelModel
from civicfeed.schemas.technician import TechnicianOut, TechnicianWorkload
from civicfeed.schemas.user import UserOut


class AIAnalysis(CamelModel):
    """Structured classification result, same shape from Gemini or the fallback."""
    domain: str
    category: str
    urgency: str
    priority: str
    severity: str
    confidence: float = Field(ge=0, le=1)
    reasoning: str
    estimated_cost: str
    time_to_resolve: str
    risk_level: str


def _lower(value):
    if isinstance(value, str):
        return value.strip().lower()
    return value


class IssueCreate(CamelModel):
    # status / progress / upvoteCount are server-owned; unknown keys are dropped
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=4000)
    category: str = Field(min_length=1, max_length=120)
    severity: IssueSeverity
    reporter_id: str = Field(min_length=1)
    location: Optional[str] = None
    image_urls: List[str] = []
    ai_analysis: Optional[AIAnalysis] = None

    @field_validator("severity", mode="before")
    @classmethod
    def normalize_severity(cls, v):
        return _lower(v)


class IssueUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, min_length=1, max_length=4000)
    category: Optional[str] = Field(default=None, min_length=1, max_length=120)
    severity: Optional[IssueSeverity] = None
    status: Optional[IssueStatus] = None
    progress: Optional[int] = Field(default=None, ge=0, le=100)
    location: Optional[str] = None
    image_urls: Optional[List[str]] = None
    assigned_technician_id: Optional[str] = None
    ai_analysis: Optional[AIAnalysis] = None
    # admin override for skipped / backward transitions
    force: bool = False

    @field_validator("severity", "status", mode="before")
    @classmethod
    def normalize_enums(cls, v):
        return _lower(v)


class IssueOut(CamelModel):
    id: str
    title: str
    description: str
    category: str
    severity: IssueSeverity
    status: IssueStatus
    progress: int
    location: Optional[str] = None
    image_urls: List[str] = []
    reporter_id: str
    assigned_technician_id: Optional[str] = None
    ai_analysis: Optional[AIAnalysis] = None
    upvote_count: int = 0
    created_at: datetime
    updated_at: datetime


class IssueView(IssueOut):
    """Issue with reporter (and, where assembled, technician) embedded for the UI."""
    reporter: Optional[UserOut] = None
    technician: Optional[TechnicianOut] = None


class UpvoteIn(CamelModel):
    user_id: Optional[str] = None


class UpvoteResult(CamelModel):
    upvoted: bool
    new_count: int


class AnalyzeIn(CamelModel):
    description: Optional[str] = None
    image_base64: Optional[str] = None
    images: List[str] = []


class IssueClassifyIn(CamelModel):
    image_base64: Optional[str] = None
    images: List[str] = []


class IssueStats(CamelModel):
    total: int
    open: int
    assigned: int
    in_progress: int
    resolved: int
    critical: int
    high: int
    completion_rate: int
    by_category: dict[str, int]
    technicians: List[TechnicianWorkload]
