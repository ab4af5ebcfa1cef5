"""
Positional media binding.

A post's assets, sorted ascending by ``sort_order``, are handed out to the
media-consuming blocks in document order:

    blocks:  [paragraph, gallery(3), media]
    assets:  [a0, a1, a2, a3]
    result:  paragraph -> (), gallery -> (a0, a1, a2), media -> (a3,)

Slots left over once the assets run out resolve to None. Every asset is
claimed at most once.
"""
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from .blocks import Block, media_slot_count


@dataclass(frozen=True)
class BlockBinding:
    block: Block
    # One entry per slot the block claims; None when no asset was left
    assets: Tuple[Optional[Any], ...] = ()

    @property
    def first_asset(self) -> Optional[Any]:
        return self.assets[0] if self.assets else None


def resolve_media_bindings(blocks: Sequence[Block], ordered_assets: Sequence[Any]) -> List[BlockBinding]:
    cursor = 0
    available = len(ordered_assets)
    bindings: List[BlockBinding] = []

    for block in blocks:
        slots = media_slot_count(block)
        assigned = tuple(
            ordered_assets[index] if index < available else None
            for index in range(cursor, cursor + slots)
        )
        cursor += slots
        bindings.append(BlockBinding(block=block, assets=assigned))

    return bindings


def total_media_slots(blocks: Sequence[Block]) -> int:
    return sum(media_slot_count(block) for block in blocks)
