from fieldnotes.extensions import db
from fieldnotes.models.media import Media
from fieldnotes.domain.lifecycle.exceptions import MediaNotFound
from fieldnotes.domain.lifecycle.post import assert_can_access
from fieldnotes.utils.audit import log_action
from fieldnotes.utils.transaction import transactional


def delete_media(
    *,
    actor,
    media_id: str,
) -> None:
    """
    Hard-delete a media asset. Allowed for the post's author and admins.

    Positions of the remaining assets are left alone; a reorder that still
    names the deleted id just skips it.
    """
    media = db.session.get(Media, media_id)
    if media is None:
        raise MediaNotFound(f"Media {media_id} not found")

    assert_can_access(media.post, actor)

    with transactional():
        post_id = media.post_id
        db.session.delete(media)

        log_action(
            action="media.delete",
            entity_type="media",
            entity_id=media_id,
            actor_id=actor.id,
            payload={"post_id": post_id},
        )
