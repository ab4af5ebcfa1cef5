from typing import Dict, Sequence
from .exceptions import InvariantViolation, ValidationError


def assert_post_fields(*, title: str, content: str) -> None:
    errors: Dict[str, str] = {}

    if not title:
        errors["title"] = "Title is required"
    if not content:
        errors["content"] = "Body is required"

    if errors:
        raise ValidationError("Title and body are required", errors)


def assert_revision_sequence(revisions: Sequence[int]) -> None:
    """
    Snapshot numbers of one post must climb by exactly one with no gaps.
    """
    for previous, current in zip(revisions, revisions[1:]):
        if current != previous + 1:
            raise InvariantViolation(
                f"Revision history is not contiguous: {list(revisions)}"
            )
