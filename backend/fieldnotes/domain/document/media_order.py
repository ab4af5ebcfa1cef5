"""
Sort positions implied by the editor's media preview.

At save time the editor reports, per block id, the assets it was showing:

    {"b3": [{"persistedId": "m-1"}, {"persistedId": "m-2"}], "b7": [...]}

Walking the blocks with the same cursor as ``resolve_media_bindings`` gives
every slot its position. Reported assets are zipped against the slots of
their block; extra reported assets beyond the block's slot count are
ignored, as are repeated ids.

Ownership is not checked here. Callers must intersect the result with the
assets that belong to the post being saved.
"""
import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from .blocks import Block, media_slot_count


@dataclass(frozen=True)
class SortUpdate:
    media_id: str
    sort_order: int


def _reference_id(item: Any) -> Optional[str]:
    if isinstance(item, str):
        return item or None
    if isinstance(item, dict):
        value = item.get("persistedId") or item.get("persisted_id")
        return str(value) if value else None
    return None


def parse_preview_map(raw: Any) -> Dict[str, List[Optional[str]]]:
    """
    Accept the raw preview payload (JSON text or already-decoded object) and
    return ``{block_id: [media_id or None, ...]}``. Anything unreadable maps
    to an empty preview.
    """
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw) if raw else {}
        except ValueError:
            return {}

    if not isinstance(raw, dict):
        return {}

    preview: Dict[str, List[Optional[str]]] = {}
    for block_id, items in raw.items():
        if isinstance(items, list):
            preview[str(block_id)] = [_reference_id(item) for item in items]
    return preview


def compute_media_sort_orders(
    blocks: Sequence[Block],
    preview: Dict[str, List[Optional[str]]],
) -> List[SortUpdate]:
    updates: List[SortUpdate] = []
    claimed = set()
    cursor = 0

    for block in blocks:
        slots = media_slot_count(block)
        if not slots:
            continue

        reported = preview.get(block.id, []) if block.id else []
        for offset, media_id in enumerate(reported[:slots]):
            if media_id and media_id not in claimed:
                claimed.add(media_id)
                updates.append(SortUpdate(media_id=media_id, sort_order=cursor + offset))

        cursor += slots

    return updates
