# File: civicfeed/routers/issues.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response

from civicfeed.core.config import settings
from civicfeed.core.errors import NotFound, ValidationError
from civicfeed.core.ratelimit import limiter
from civicfeed.core.security import get_actor_id, get_optional_user
from civicfeed.db.session import get_classifier, get_store
from civicfeed.db.store import MemoryStore
from civicfeed.models.user import User
from civicfeed.schemas.comment import CommentCreate, CommentOut
from civicfeed.schemas.issue import (
    IssueClassifyIn,
    IssueCreate,
    IssueOut,
    IssueStats,
    IssueUpdate,
    IssueView,
    UpvoteIn,
    UpvoteResult,
)
from civicfeed.services import comments, lifecycle, upvotes, views
from civicfeed.services.collage import composite_image

router = APIRouter(prefix="/api/issues", tags=["issues"])


@router.get("", response_model=List[IssueView])
def list_issues(store: MemoryStore = Depends(get_store)):
    return views.list_issues_with_reporter(store)


@router.get("/my", response_model=List[IssueView])
def my_issues(
    user_id: Optional[str] = Query(default=None, alias="userId"),
    actor_id: Optional[str] = Depends(get_actor_id),
    store: MemoryStore = Depends(get_store),
):
    uid = (user_id or "").strip() or actor_id
    if not uid:
        raise ValidationError("User ID required", field="userId")
    return views.list_issues_for_user(store, uid)


@router.get("/stats/summary", response_model=IssueStats)
def stats_summary(store: MemoryStore = Depends(get_store)):
    return views.issue_stats(store)


@router.get("/{issue_id}", response_model=IssueView)
def get_issue(issue_id: str, store: MemoryStore = Depends(get_store)):
    return views.get_issue_with_reporter(store, issue_id)


@router.post("", response_model=IssueOut, status_code=201)
@limiter.limit(settings.rate_limit_create)
def create_issue(
    request: Request,
    body: IssueCreate,
    store: MemoryStore = Depends(get_store),
):
    return lifecycle.create_issue(store, body)


@router.patch("/{issue_id}", response_model=IssueOut)
def update_issue(
    issue_id: str,
    body: IssueUpdate,
    store: MemoryStore = Depends(get_store),
    actor: Optional[User] = Depends(get_optional_user),
):
    return lifecycle.update_issue(store, issue_id, body, actor=actor)


@router.delete("/{issue_id}", status_code=204)
def delete_issue(issue_id: str, store: MemoryStore = Depends(get_store)):
    if not lifecycle.delete_issue(store, issue_id):
        raise NotFound("Issue not found")
    return Response(status_code=204)


@router.post("/{issue_id}/upvote", response_model=UpvoteResult)
def toggle_upvote(
    issue_id: str,
    body: Optional[UpvoteIn] = None,
    actor_id: Optional[str] = Depends(get_actor_id),
    store: MemoryStore = Depends(get_store),
):
    voter = (body.user_id if body else None) or actor_id or settings.demo_user_id
    return upvotes.toggle_upvote(store, issue_id, voter)


@router.post("/{issue_id}/analyze", response_model=IssueOut)
@limiter.limit(settings.rate_limit_analyze)
def analyze_issue(
    request: Request,
    issue_id: str,
    body: Optional[IssueClassifyIn] = None,
    store: MemoryStore = Depends(get_store),
    classifier=Depends(get_classifier),
):
    image = None
    if body:
        image = composite_image(
            body.image_base64,
            body.images,
            tile_size=settings.collage_tile_size,
            max_images=settings.collage_max_images,
        )
    return lifecycle.classify_issue(store, classifier, issue_id, image)


@router.get("/{issue_id}/comments", response_model=List[CommentOut])
def list_comments(issue_id: str, store: MemoryStore = Depends(get_store)):
    return comments.list_comments(store, issue_id)


@router.post("/{issue_id}/comments", response_model=CommentOut, status_code=201)
def add_comment(
    issue_id: str,
    body: CommentCreate,
    actor_id: Optional[str] = Depends(get_actor_id),
    store: MemoryStore = Depends(get_store),
):
    return comments.create_comment(store, issue_id, body.content, body.user_id or actor_id)
