from typing import Any, List

from fieldnotes.extensions import db
from fieldnotes.models.media import Media
from fieldnotes.domain.document.blocks import parse_blocks
from fieldnotes.domain.document.media_order import (
    SortUpdate,
    compute_media_sort_orders,
    parse_preview_map,
)
from fieldnotes.utils.audit import log_action


def reconcile_media_order(
    *,
    post,
    content: str,
    preview: Any,
    actor_id: str,
) -> List[SortUpdate]:
    """
    Persist the media order the editor reported at save time.

    Responsibilities:
    - derive slot positions from the saved blocks
    - drop every id that does not belong to ``post``
    - move only the reported media, plus any unreported asset whose slot
      a reported one takes

    Must run inside the caller's transaction. Returns the updates applied.
    """
    blocks = parse_blocks(content)
    if not blocks:
        return []

    requested = compute_media_sort_orders(blocks, parse_preview_map(preview))
    if not requested:
        return []

    # Ownership intersection: deleted or foreign ids simply are not here
    owned = (
        Media.query
        .filter(Media.post_id == post.id)
        .order_by(Media.sort_order.asc())
        .all()
    )
    by_id = {media.id: media for media in owned}
    updates = [update for update in requested if update.media_id in by_id]
    if not updates:
        return []

    final_positions = {update.media_id: update.sort_order for update in updates}
    targets = set(final_positions.values())

    # Unreported media keep their position unless a reported asset takes it;
    # then they move above every position in use
    next_free = max(targets | {media.sort_order for media in owned}) + 1
    for media in owned:
        if media.id in final_positions:
            continue
        if media.sort_order in targets:
            final_positions[media.id] = next_free
            next_free += 1
        else:
            final_positions[media.id] = media.sort_order

    moving = [media for media in owned if media.sort_order != final_positions[media.id]]
    if not moving:
        return updates

    # Two passes keep (post_id, sort_order) unique at every statement
    for index, media in enumerate(moving, start=1):
        media.sort_order = -index
    db.session.flush()

    for media in moving:
        media.sort_order = final_positions[media.id]
    db.session.flush()

    log_action(
        action="media.reorder",
        entity_type="post",
        entity_id=post.id,
        actor_id=actor_id,
        payload={"updated": len(updates), "ignored": len(requested) - len(updates)},
    )

    return updates
