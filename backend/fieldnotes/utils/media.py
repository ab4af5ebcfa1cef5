from werkzeug.utils import secure_filename
from fieldnotes.models.media import MEDIA_PHOTO, MEDIA_VIDEO

GENERIC_MIME_TYPE = "application/octet-stream"

VIDEO_MIME_MAP = {
    "mp4": "video/mp4",
    "m4v": "video/x-m4v",
    "mov": "video/quicktime",
    "webm": "video/webm",
    "ogv": "video/ogg",
    "ogg": "video/ogg",
}
IMAGE_MIME_MAP = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
    "avif": "image/avif",
    "bmp": "image/bmp",
    "tif": "image/tiff",
    "tiff": "image/tiff",
}

ALLOWED_EXTENSIONS = set(VIDEO_MIME_MAP) | set(IMAGE_MIME_MAP)


def file_extension(filename):
    parts = (filename or "").lower().rsplit('.', 1)
    return parts[1] if len(parts) > 1 else ""

def allowed_file(filename):
    return file_extension(filename) in ALLOWED_EXTENSIONS

def clean_filename(filename):
    """Strip path components and unsafe characters from an uploaded name."""
    cleaned = secure_filename(filename or "")
    if not cleaned:
        raise ValueError("File name is required")
    return cleaned

def resolve_mime_type(filename, declared=None):
    """
    Prefer the declared type unless it is missing or generic, then fall back
    to the file extension.
    """
    if declared and declared != GENERIC_MIME_TYPE:
        return declared

    ext = file_extension(filename)
    return VIDEO_MIME_MAP.get(ext) or IMAGE_MIME_MAP.get(ext) or declared or GENERIC_MIME_TYPE

def resolve_media_kind(filename, declared=None):
    declared = declared if declared and declared != GENERIC_MIME_TYPE else None
    if declared:
        return MEDIA_VIDEO if declared.startswith("video") else MEDIA_PHOTO

    ext = file_extension(filename)
    return MEDIA_VIDEO if ext in VIDEO_MIME_MAP else MEDIA_PHOTO
