import pytest

from conftest import blocks_json
from fieldnotes.extensions import db
from fieldnotes.models import AuditLog, Post, PostRevision
from fieldnotes.application.editorial.autosave_post import autosave_post
from fieldnotes.application.editorial.fields import UNTITLED
from fieldnotes.domain.lifecycle.exceptions import AccessDenied, PostNotFound


def test_first_autosave_creates_draft(author):
    post_id = autosave_post(actor=author, data={"content": "Notes from the trailhead"})

    post = db.session.get(Post, post_id)
    assert post.status == "DRAFT"
    assert post.revision == 1
    assert post.title == UNTITLED
    assert post.slug.startswith("untitled-field-note-")
    assert PostRevision.query.count() == 0


def test_autosave_updates_in_place(author):
    post_id = autosave_post(actor=author, data={"title": "Lake"})

    again = autosave_post(actor=author, data={
        "postId": post_id,
        "title": "Lake Trek",
        "content": blocks_json({"id": "p", "type": "paragraph", "text": "Cold water."}),
        "tags": "lakes",
    })

    post = db.session.get(Post, post_id)
    assert again == post_id
    assert post.title == "Lake Trek"
    assert [t.name for t in post.tags] == ["lakes"]
    assert Post.query.count() == 1
    assert AuditLog.query.filter_by(action="post.autosave").count() == 2


def test_autosave_never_touches_status_or_revision(author, make_post):
    post = make_post(author, status="APPROVED", revision=4)

    autosave_post(actor=author, data={"postId": post.id, "title": "Quiet edit", "content": "Plain text"})

    assert post.status == "APPROVED"
    assert post.revision == 4
    assert post.title == "Quiet edit"
    assert PostRevision.query.count() == 0


def test_autosave_of_foreign_post_is_denied(author, other_author, make_post):
    post = make_post(author)

    with pytest.raises(AccessDenied):
        autosave_post(actor=other_author, data={"postId": post.id, "title": "Mine now"})


def test_autosave_of_unknown_post(author):
    with pytest.raises(PostNotFound):
        autosave_post(actor=author, data={"postId": "missing"})
