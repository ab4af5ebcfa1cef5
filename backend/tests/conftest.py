import json

import pytest
from flask_jwt_extended import create_access_token

from fieldnotes import create_app
from fieldnotes.extensions import db
from fieldnotes.models import Media, Post, User, ROLE_ADMIN, ROLE_USER


@pytest.fixture
def app():
    app = create_app("testing")

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def _make_user(email, role, name=None):
    user = User()
    user.email = email
    user.name = name or email.split("@")[0]
    user.role = role
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def author(app):
    return _make_user("author@example.com", ROLE_USER, "Ada")


@pytest.fixture
def other_author(app):
    return _make_user("other@example.com", ROLE_USER, "Otto")


@pytest.fixture
def admin(app):
    return _make_user("admin@example.com", ROLE_ADMIN, "Edie")


def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(identity=user.id)}"}


def blocks_json(*blocks):
    return json.dumps(list(blocks))


@pytest.fixture
def make_post(app):
    """Insert a post directly, bypassing the lifecycle."""
    counter = {"n": 0}

    def _make(author, *, status="DRAFT", revision=1, title="Lake Trek", content=None, slug=None):
        counter["n"] += 1
        post = Post()
        post.author_id = author.id
        post.title = title
        post.slug = slug or f"post-{counter['n']}"
        post.excerpt = ""
        post.content = content if content is not None else blocks_json(
            {"id": "p1", "type": "paragraph", "text": "Shoreline at dawn."}
        )
        post.status = status
        post.revision = revision
        db.session.add(post)
        db.session.commit()
        return post

    return _make


@pytest.fixture
def add_media(app):
    def _add(post, sort_order, name=None):
        media = Media()
        media.post_id = post.id
        media.file_name = name or f"photo-{sort_order}.jpg"
        media.mime_type = "image/jpeg"
        media.data = b"\xff\xd8\xff"
        media.alt_text = media.file_name
        media.sort_order = sort_order
        db.session.add(media)
        db.session.commit()
        return media

    return _add
