from typing import Any, Dict, Optional
from fieldnotes.extensions import db
from fieldnotes.models.media import Media
from fieldnotes.domain.invariants.exceptions import ValidationError
from fieldnotes.utils.audit import log_action
from fieldnotes.utils.media import allowed_file, clean_filename, resolve_media_kind, resolve_mime_type
from fieldnotes.utils.transaction import transactional
from .access import load_post_for_actor


def _is_media_type(declared: Optional[str]) -> bool:
    return bool(declared) and declared.split("/", 1)[0] in ("image", "video")


def _free_position(post_id: str, requested: Optional[int]) -> int:
    taken = {
        row[0]
        for row in db.session.query(Media.sort_order).filter(Media.post_id == post_id).all()
    }
    if requested is not None and requested >= 0 and requested not in taken:
        return requested
    return max(taken) + 1 if taken else 0


def upload_media(
    *,
    actor,
    post_id: str,
    filename: str,
    payload: bytes,
    declared_type: Optional[str] = None,
    alt_text: Optional[str] = None,
    sort_order: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Attach an uploaded photo or video to a post.

    The requested sort position is used when it is free; otherwise the
    asset goes after the post's last one.
    """
    post = load_post_for_actor(post_id, actor, lock=True)

    try:
        name = clean_filename(filename)
    except ValueError as exc:
        raise ValidationError(str(exc), {"file": "File name is required"}) from exc
    if not payload:
        raise ValidationError("Uploaded file is empty", {"file": "File is empty"})
    if not allowed_file(name) and not _is_media_type(declared_type):
        raise ValidationError("Only photos and videos can be uploaded", {"file": "Unsupported file type"})

    with transactional():
        media = Media()
        media.post_id = post.id
        media.type = resolve_media_kind(name, declared_type)
        media.mime_type = resolve_mime_type(name, declared_type)
        media.file_name = name
        media.data = payload
        media.alt_text = (alt_text or "").strip() or name
        media.sort_order = _free_position(post.id, sort_order)

        db.session.add(media)
        db.session.flush()

        log_action(
            action="media.upload",
            entity_type="media",
            entity_id=media.id,
            actor_id=actor.id,
            payload={"post_id": post.id, "sort_order": media.sort_order, "type": media.type},
        )

    return {
        "id": media.id,
        "file_name": media.file_name,
        "mime_type": media.mime_type,
        "type": media.type,
        "sort_order": media.sort_order,
    }
