from .user import User, ROLE_USER, ROLE_ADMIN
from .taxonomy import Tag, Category, post_tags, post_categories
from .post import Post
from .post_revision import PostRevision
from .admin_note import AdminNote
from .media import Media, MEDIA_PHOTO, MEDIA_VIDEO
from .audit_log import AuditLog
