from flask import current_app


def normalize_media(media, admin=False):
    if media is None:
        return None

    base = {
        "id": media.id,
        "type": media.type,
        "mime_type": media.mime_type,
        "alt_text": media.alt_text,
        # Bytes are served by the media store, not by this service
        "url": f"{current_app.config['MEDIA_URL_PREFIX']}/{media.id}",
    }

    if admin:
        base["file_name"] = media.file_name
        base["sort_order"] = media.sort_order

    return base
