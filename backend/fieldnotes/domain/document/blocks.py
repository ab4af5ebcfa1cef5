"""
Block-sequence model of a field note body.

A body is stored as a JSON array of block objects written by the editor:

    [
        {"id": "b1", "type": "heading", "level": "h2", "text": "Day one"},
        {"id": "b2", "type": "paragraph", "text": "We set off at dawn."},
        {"id": "b3", "type": "gallery", "galleryItems": [{"caption": "..."}]},
    ]

Media-consuming blocks (media, gallery, background) never name the asset
they display. Assets are bound positionally, see ``bindings.py``.

Bodies written before the block editor existed are either rich markup or
plain text. ``parse_body`` degrades to those renderings instead of failing.
"""
import json
import re
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Union

from .sanitize import sanitize_rich_text

BODY_BLOCKS = "blocks"
BODY_MARKUP = "markup"
BODY_PLAIN = "plain"

HEADING_LEVELS = {"h1": 1, "h2": 2, "h3": 3}
DEFAULT_HEADING_LEVEL = 2


@dataclass(frozen=True)
class HeadingBlock:
    kind: ClassVar[str] = "heading"
    id: Optional[str]
    text: str = ""
    level: int = DEFAULT_HEADING_LEVEL


@dataclass(frozen=True)
class ParagraphBlock:
    kind: ClassVar[str] = "paragraph"
    id: Optional[str]
    text: str = ""


@dataclass(frozen=True)
class QuoteBlock:
    kind: ClassVar[str] = "quote"
    id: Optional[str]
    text: str = ""


@dataclass(frozen=True)
class ListBlock:
    kind: ClassVar[str] = "list"
    id: Optional[str]
    items: Tuple[str, ...] = ()


@dataclass(frozen=True)
class DividerBlock:
    kind: ClassVar[str] = "divider"
    id: Optional[str]


@dataclass(frozen=True)
class MediaBlock:
    kind: ClassVar[str] = "media"
    id: Optional[str]
    caption: str = ""
    alt_text: str = ""
    height: Optional[int] = None


@dataclass(frozen=True)
class GalleryItem:
    caption: str = ""
    alt_text: str = ""


@dataclass(frozen=True)
class GalleryBlock:
    kind: ClassVar[str] = "gallery"
    id: Optional[str]
    items: Tuple[GalleryItem, ...] = ()


@dataclass(frozen=True)
class BackgroundBlock:
    kind: ClassVar[str] = "background"
    id: Optional[str]
    overlay_title: str = ""
    overlay_text: str = ""
    height: Optional[int] = None


Block = Union[
    HeadingBlock,
    ParagraphBlock,
    QuoteBlock,
    ListBlock,
    DividerBlock,
    MediaBlock,
    GalleryBlock,
    BackgroundBlock,
]


@dataclass(frozen=True)
class ParsedBody:
    format: str
    blocks: Tuple[Block, ...] = ()
    markup: str = ""
    paragraphs: Tuple[str, ...] = ()


def media_slot_count(block: Block) -> int:
    """Number of assets a block claims from the ordered media list."""
    if isinstance(block, (MediaBlock, BackgroundBlock)):
        return 1
    if isinstance(block, GalleryBlock):
        return len(block.items)
    if isinstance(block, (HeadingBlock, ParagraphBlock, QuoteBlock, ListBlock, DividerBlock)):
        return 0
    raise TypeError(f"Unknown block: {block!r}")


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _height(value: Any) -> Optional[int]:
    # bool is an int subclass; editor never sends it for height
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return int(value)


def _heading_level(value: Any) -> int:
    if isinstance(value, str):
        return HEADING_LEVELS.get(value.lower(), DEFAULT_HEADING_LEVEL)
    if isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= 3:
        return value
    return DEFAULT_HEADING_LEVEL


def block_from_dict(data: Dict[str, Any]) -> Block:
    """
    Build a typed block from one editor object.

    Unknown or missing ``type`` values come from older editor builds and
    render as a paragraph of whatever ``text`` they carry.
    """
    block_id = data.get("id")
    block_id = str(block_id) if block_id is not None else None
    kind = data.get("type")

    if kind == "heading":
        return HeadingBlock(id=block_id, text=_text(data.get("text")), level=_heading_level(data.get("level")))
    if kind == "quote":
        return QuoteBlock(id=block_id, text=_text(data.get("text")))
    if kind == "list":
        raw_items = data.get("items")
        items = tuple(_text(item) for item in raw_items) if isinstance(raw_items, list) else ()
        return ListBlock(id=block_id, items=items)
    if kind == "divider":
        return DividerBlock(id=block_id)
    if kind == "media":
        return MediaBlock(
            id=block_id,
            caption=_text(data.get("caption")),
            alt_text=_text(data.get("altText")),
            height=_height(data.get("height")),
        )
    if kind == "gallery":
        raw_items = data.get("galleryItems")
        items = ()
        if isinstance(raw_items, list):
            items = tuple(
                GalleryItem(
                    caption=_text(item.get("caption")) if isinstance(item, dict) else "",
                    alt_text=_text(item.get("altText")) if isinstance(item, dict) else "",
                )
                for item in raw_items
            )
        return GalleryBlock(id=block_id, items=items)
    if kind == "background":
        return BackgroundBlock(
            id=block_id,
            overlay_title=_text(data.get("overlayTitle")),
            overlay_text=_text(data.get("overlayText")),
            height=_height(data.get("height")),
        )

    return ParagraphBlock(id=block_id, text=_text(data.get("text")))


def block_to_dict(block: Block) -> Dict[str, Any]:
    """Inverse of ``block_from_dict``, in the editor's wire shape."""
    data: Dict[str, Any] = {"id": block.id, "type": block.kind}

    if isinstance(block, (ParagraphBlock, QuoteBlock)):
        data["text"] = block.text
    elif isinstance(block, HeadingBlock):
        data["text"] = block.text
        data["level"] = f"h{block.level}"
    elif isinstance(block, ListBlock):
        data["items"] = list(block.items)
    elif isinstance(block, DividerBlock):
        pass
    elif isinstance(block, MediaBlock):
        data.update(caption=block.caption, altText=block.alt_text, height=block.height)
    elif isinstance(block, GalleryBlock):
        data["galleryItems"] = [
            {"caption": item.caption, "altText": item.alt_text} for item in block.items
        ]
    elif isinstance(block, BackgroundBlock):
        data.update(
            overlayTitle=block.overlay_title,
            overlayText=block.overlay_text,
            height=block.height,
        )
    else:
        raise TypeError(f"Unknown block: {block!r}")

    return data


def parse_blocks(raw: Optional[str]) -> Optional[List[Block]]:
    """
    Return the typed blocks of a stored body, or None when the body is not
    a block sequence. Non-object entries inside the array are skipped.
    """
    if not raw:
        return None

    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        return None

    if not isinstance(data, list):
        return None

    return [block_from_dict(item) for item in data if isinstance(item, dict)]


def looks_like_markup(raw: str) -> bool:
    return raw.lstrip().startswith("<")


def split_paragraphs(raw: str) -> List[str]:
    chunks = re.split(r"\n\s*\n", raw.strip())
    return [" ".join(line.strip() for line in chunk.splitlines()).strip() for chunk in chunks if chunk.strip()]


def parse_body(raw: Optional[str]) -> ParsedBody:
    """
    Parse a stored body. Never raises.

    Fallback order:
    - JSON block array  -> typed blocks
    - looks like markup -> sanitized HTML, no block semantics
    - anything else     -> plain paragraphs split on blank lines
    """
    raw = raw or ""

    blocks = parse_blocks(raw)
    if blocks is not None:
        return ParsedBody(format=BODY_BLOCKS, blocks=tuple(blocks))

    if looks_like_markup(raw):
        return ParsedBody(format=BODY_MARKUP, markup=sanitize_rich_text(raw))

    return ParsedBody(format=BODY_PLAIN, paragraphs=tuple(split_paragraphs(raw)))
