import math
import re
from typing import List, Optional

from .blocks import (
    BackgroundBlock,
    DividerBlock,
    GalleryBlock,
    HeadingBlock,
    ListBlock,
    MediaBlock,
    ParagraphBlock,
    QuoteBlock,
    parse_blocks,
)

DEFAULT_EXCERPT_LENGTH = 160
DEFAULT_WORDS_PER_MINUTE = 200

_INLINE_PATTERNS = (
    (re.compile(r"\[(.*?)\]\((.*?)\)"), r"\1"),
    (re.compile(r"\*\*(.*?)\*\*"), r"\1"),
    (re.compile(r"__(.*?)__"), r"\1"),
    (re.compile(r"\*(.*?)\*"), r"\1"),
    (re.compile(r"~~(.*?)~~"), r"\1"),
    (re.compile(r"`(.*?)`"), r"\1"),
)
_HTML_TAG = re.compile(r"<[^>]*>")


def slugify(value: str) -> str:
    value = value.lower().strip()
    value = re.sub(r"[^a-z0-9\s-]", "", value)
    value = re.sub(r"\s+", "-", value)
    return re.sub(r"-+", "-", value)


def strip_inline_formatting(value: str) -> str:
    for pattern, replacement in _INLINE_PATTERNS:
        value = pattern.sub(replacement, value)
    return value


def _block_text(block) -> str:
    if isinstance(block, ListBlock):
        return " ".join(strip_inline_formatting(item) for item in block.items)
    if isinstance(block, BackgroundBlock):
        parts = [block.overlay_title, block.overlay_text]
        return " ".join(strip_inline_formatting(part) for part in parts if part)
    if isinstance(block, (HeadingBlock, ParagraphBlock, QuoteBlock)):
        return strip_inline_formatting(block.text)
    if isinstance(block, (DividerBlock, MediaBlock, GalleryBlock)):
        return ""
    raise TypeError(f"Unknown block: {block!r}")


def extract_text(content: str) -> str:
    """Readable text of a body, whatever format it is stored in."""
    blocks = parse_blocks(content)
    if blocks is None:
        return _HTML_TAG.sub(" ", content or "")
    return " ".join(_block_text(block) for block in blocks)


def extract_preview_text(content: str, max_length: int = DEFAULT_EXCERPT_LENGTH) -> str:
    flattened = extract_text(content).strip()
    if len(flattened) <= max_length:
        return flattened
    return f"{flattened[:max_length].strip()}..."


def estimate_read_time_minutes(content: str, words_per_minute: int = DEFAULT_WORDS_PER_MINUTE) -> int:
    words = len(extract_text(content).split())
    return max(1, math.ceil(words / words_per_minute))


def split_names(raw: Optional[str]) -> List[str]:
    """
    Comma-separated names, trimmed, blanks dropped, de-duplicated
    case-insensitively (first spelling wins).
    """
    names: List[str] = []
    seen = set()
    for name in (raw or "").split(","):
        name = name.strip()
        if name and name.lower() not in seen:
            seen.add(name.lower())
            names.append(name)
    return names
