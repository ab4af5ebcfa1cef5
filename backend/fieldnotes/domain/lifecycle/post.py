from enum import Enum
from typing import Any, Dict, Optional, Set

from fieldnotes.domain.invariants.exceptions import InvariantViolation, ValidationError
from .exceptions import AccessDenied, EditLocked


class PostStatus(str, Enum):
    DRAFT = "DRAFT"
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    NEEDS_CHANGES = "NEEDS_CHANGES"
    REJECTED = "REJECTED"


# Only approved posts are publicly visible
PUBLIC_STATUS = PostStatus.APPROVED

REVIEW_DECISIONS: Dict[str, PostStatus] = {
    "approve": PostStatus.APPROVED,
    "needs-changes": PostStatus.NEEDS_CHANGES,
    "reject": PostStatus.REJECTED,
}

# Decisions that must explain themselves with a feedback note
NOTE_REQUIRED: Set[PostStatus] = {PostStatus.NEEDS_CHANGES, PostStatus.REJECTED}


def clean_text(value: Any, field: str) -> str:
    """Strip a free-text payload value; anything but text is a field error."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be text", {field: "Must be text"})
    return value.strip()


def parse_status(value: str) -> PostStatus:
    try:
        return PostStatus(value.strip().upper())
    except (AttributeError, ValueError):
        raise ValidationError(f"Unknown status: {value}", {"status": "Unknown status"})


def parse_decision(value: str) -> PostStatus:
    decision = REVIEW_DECISIONS.get(clean_text(value, "decision").lower())
    if decision is None:
        raise ValidationError(f"Unknown review decision: {value}", {"decision": "Unknown decision"})
    return decision


def resolve_submit_status(
    *,
    is_admin: bool,
    current: Optional[PostStatus],
    hint: Optional[str],
) -> PostStatus:
    """
    Status a post ends up in after an explicit save.

    - admins get the status they ask for, defaulting to the current one
      (DRAFT for a new post)
    - authors always go to review; their hint is ignored
    """
    hint = clean_text(hint, "status")

    if is_admin:
        if hint:
            return parse_status(hint)
        return current or PostStatus.DRAFT

    return PostStatus.PENDING


def assert_can_access(post, actor) -> None:
    if not actor.is_admin and post.author_id != actor.id:
        raise AccessDenied("Only the author or an admin may change this post")


def assert_not_locked(post, actor) -> None:
    """
    Authors cannot submit edits while their post waits for review.
    Admins are never locked out, including of their own pending posts.
    """
    if post.status == PostStatus.PENDING.value and not actor.is_admin:
        raise EditLocked(post.id)


def assert_reviewable(post) -> None:
    if post.status == PostStatus.DRAFT.value:
        raise InvariantViolation("Drafts have not been submitted for review")
