from dataclasses import dataclass
from typing import Any, Dict, Optional

from flask import current_app

from fieldnotes.domain.document.text import estimate_read_time_minutes, extract_preview_text

UNTITLED = "Untitled field note"


@dataclass(frozen=True)
class PostFields:
    title: str
    excerpt: str
    content: str
    seo_title: Optional[str]
    seo_description: Optional[str]
    tags: str
    categories: str

    @property
    def read_time_min(self) -> int:
        return estimate_read_time_minutes(
            self.content, current_app.config["READ_WORDS_PER_MINUTE"]
        )

    def as_snapshot(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "excerpt": self.excerpt,
            "content": self.content,
            "seo_title": self.seo_title,
            "seo_description": self.seo_description,
        }


def _clean(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    return str(value).strip() if value is not None else ""


def read_post_fields(data: Dict[str, Any], *, default_title: str = "") -> PostFields:
    """
    Normalize an editor payload. Blank SEO fields become None and a blank
    excerpt is derived from the body.
    """
    content = _clean(data, "content")
    excerpt = _clean(data, "excerpt") or extract_preview_text(
        content, current_app.config["EXCERPT_MAX_LENGTH"]
    )

    return PostFields(
        title=_clean(data, "title") or default_title,
        excerpt=excerpt,
        content=content,
        seo_title=_clean(data, "seoTitle") or None,
        seo_description=_clean(data, "seoDescription") or None,
        tags=_clean(data, "tags"),
        categories=_clean(data, "categories"),
    )


def apply_post_fields(post, fields: PostFields) -> None:
    for name, value in fields.as_snapshot().items():
        setattr(post, name, value)
    post.read_time_min = fields.read_time_min
