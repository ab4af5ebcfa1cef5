class PostNotFound(LookupError):
    pass


class RevisionNotFound(LookupError):
    pass


class MediaNotFound(LookupError):
    pass


class AccessDenied(Exception):
    """Caller is authenticated but neither the owner nor an admin."""


class EditLocked(Exception):
    """The post is awaiting review and its author may not edit it."""

    def __init__(self, post_id: str):
        super().__init__(f"Post {post_id} is locked while pending review")
        self.post_id = post_id
