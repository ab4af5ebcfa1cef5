from fieldnotes.extensions import db
from fieldnotes.domain.invariants.post import assert_revision_sequence

SNAPSHOT_FIELDS = ("title", "excerpt", "content", "seo_title", "seo_description")


def snapshot_post(post):
    return {field: getattr(post, field) for field in SNAPSHOT_FIELDS}


def content_differs(post, fields):
    return any(getattr(post, name) != fields[name] for name in SNAPSHOT_FIELDS)


def revision_numbers(post_id):
    from fieldnotes.models.post_revision import PostRevision

    rows = (
        db.session.query(PostRevision.revision)
        .filter_by(post_id=post_id)
        .order_by(PostRevision.revision.asc())
        .all()
    )
    return [row[0] for row in rows]


def next_revision(post):
    """
    Number for the next snapshot of ``post``.

    A post that has never been snapshotted (autosave-created) seeds its
    history at its current revision instead of skipping ahead.
    """
    numbers = revision_numbers(post.id)
    if not numbers:
        return post.revision
    return max(post.revision, numbers[-1]) + 1


def append_revision(post, revision):
    """
    Stage an immutable snapshot of the post's current content at ``revision``
    and move the post's counter to it.
    """
    from fieldnotes.models.post_revision import PostRevision

    assert_revision_sequence(revision_numbers(post.id) + [revision])

    snapshot = PostRevision()
    snapshot.post_id = post.id
    snapshot.revision = revision
    for field, value in snapshot_post(post).items():
        setattr(snapshot, field, value)

    post.revision = revision
    db.session.add(snapshot)
    return snapshot
