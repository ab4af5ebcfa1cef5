import io

import pytest

from conftest import auth_headers, blocks_json
from fieldnotes.extensions import db
from fieldnotes.models import Media, Post
from fieldnotes.utils.taxonomy import rebind_taxonomy
from fieldnotes.utils.versioning import append_revision

BODY = blocks_json(
    {"id": "p1", "type": "paragraph", "text": "Ice on the lake."},
    {"id": "m1", "type": "media", "caption": "Shore"},
)


def seeded(post):
    append_revision(post, post.revision)
    db.session.commit()
    return post


def test_health(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.get_json()["status"] == "ok"


class TestSignIn:

    def test_missing_token_redirects_to_login(self, client):
        response = client.post("/api/v1/editor/posts", json={"title": "x", "content": "y"})

        assert response.status_code == 401
        assert response.get_json()["redirect"] == "/login"

    def test_garbage_token_redirects_to_login(self, client):
        response = client.post(
            "/api/v1/editor/autosave",
            json={},
            headers={"Authorization": "Bearer not-a-token"},
        )

        assert response.status_code == 401
        assert response.get_json()["redirect"] == "/login"

    def test_inactive_user_is_refused(self, client, author):
        author.is_active = False
        db.session.commit()

        response = client.post("/api/v1/editor/autosave", json={}, headers=auth_headers(author))

        assert response.status_code == 401


class TestEditor:

    def test_autosave_returns_post_id(self, client, author):
        response = client.post(
            "/api/v1/editor/autosave",
            json={"title": "Lake Trek", "content": BODY},
            headers=auth_headers(author),
        )

        assert response.status_code == 200
        post = db.session.get(Post, response.get_json()["postId"])
        assert post.status == "DRAFT"

    def test_submit_for_review(self, client, author):
        response = client.post(
            "/api/v1/editor/posts",
            json={"title": "Lake Trek", "content": BODY},
            headers=auth_headers(author),
        )

        data = response.get_json()
        assert response.status_code == 200
        assert data["status"] == "submitted"
        assert data["postStatus"] == "PENDING"
        assert data["revision"] == 1

    def test_submit_accepts_form_data(self, client, author):
        response = client.post(
            "/api/v1/editor/posts",
            data={"title": "Lake Trek", "content": BODY},
            headers=auth_headers(author),
        )

        assert response.status_code == 200
        assert response.get_json()["postStatus"] == "PENDING"

    def test_admin_publish_redirects_to_essay(self, client, admin):
        response = client.post(
            "/api/v1/editor/posts",
            json={"title": "Lake Trek", "content": BODY, "status": "APPROVED"},
            headers=auth_headers(admin),
        )

        data = response.get_json()
        assert data["status"] == "published"
        assert data["redirect"].startswith("/essay/lake-trek-")

    def test_validation_error_lists_fields(self, client, author):
        response = client.post(
            "/api/v1/editor/posts",
            json={"title": "", "content": BODY},
            headers=auth_headers(author),
        )

        assert response.status_code == 400
        assert response.get_json()["fields"] == {"title": "Title is required"}

    def test_locked_post_redirects_to_editor(self, client, author, make_post):
        post = seeded(make_post(author, status="PENDING"))

        response = client.post(
            "/api/v1/editor/posts",
            json={"postId": post.id, "title": "Again", "content": BODY},
            headers=auth_headers(author),
        )

        assert response.status_code == 409
        assert response.get_json()["redirect"] == "/editor?locked=1"

    def test_foreign_post_is_forbidden(self, client, author, other_author, make_post):
        post = make_post(author)

        response = client.get(f"/api/v1/editor/posts/{post.id}", headers=auth_headers(other_author))

        assert response.status_code == 403

    def test_editor_view_lists_history_newest_first(self, client, author, admin, make_post):
        post = seeded(make_post(author, status="NEEDS_CHANGES"))
        client.post(
            "/api/v1/editor/posts",
            json={"postId": post.id, "title": "Lake Trek II", "content": BODY},
            headers=auth_headers(author),
        )

        response = client.get(f"/api/v1/editor/posts/{post.id}", headers=auth_headers(author))

        data = response.get_json()
        assert response.status_code == 200
        assert data["status"] == "PENDING"
        assert [r["revision"] for r in data["revisions"]] == [2, 1]
        assert data["notes"] == []

    def test_restore_endpoint(self, client, admin, author, make_post):
        post = seeded(make_post(author, status="APPROVED"))
        first = post.revisions[0]

        response = client.post(
            f"/api/v1/editor/revisions/{first.id}/restore",
            json={},
            headers=auth_headers(admin),
        )

        data = response.get_json()
        assert response.status_code == 200
        assert data["revision"] == 2
        assert data["postStatus"] == "APPROVED"

    def test_unknown_revision_is_not_found(self, client, admin):
        response = client.post(
            "/api/v1/editor/revisions/missing/restore",
            json={},
            headers=auth_headers(admin),
        )

        assert response.status_code == 404


class TestModeration:

    def test_review_needs_note_for_changes(self, client, admin, author, make_post):
        post = seeded(make_post(author, status="PENDING"))

        response = client.post(
            f"/api/v1/moderation/posts/{post.id}/review",
            json={"decision": "needs-changes"},
            headers=auth_headers(admin),
        )

        assert response.get_json() == {"postId": post.id, "status": "PENDING", "applied": False}

    def test_review_is_admin_only(self, client, author, make_post):
        post = seeded(make_post(author, status="PENDING"))

        response = client.post(
            f"/api/v1/moderation/posts/{post.id}/review",
            json={"decision": "approve"},
            headers=auth_headers(author),
        )

        assert response.status_code == 403
        assert post.status == "PENDING"

    def test_reviewing_a_draft_is_rejected(self, client, admin, author, make_post):
        post = make_post(author)

        response = client.post(
            f"/api/v1/moderation/posts/{post.id}/review",
            json={"decision": "approve"},
            headers=auth_headers(admin),
        )

        assert response.status_code == 400

    def test_queue_lists_waiting_posts(self, client, admin, author, make_post):
        make_post(author, status="PENDING", title="One")
        make_post(author, status="NEEDS_CHANGES", title="Two")
        make_post(author, status="APPROVED", title="Three")
        make_post(author, status="DRAFT", title="Four")

        response = client.get("/api/v1/moderation/queue", headers=auth_headers(admin))

        data = response.get_json()
        assert response.status_code == 200
        assert sorted(item["title"] for item in data["items"]) == ["One", "Two"]
        assert data["counts"] == {"PENDING": 1, "NEEDS_CHANGES": 1}
        assert data["pagination"]["has_more"] is False

    def test_queue_filters_and_pages(self, client, admin, author, make_post):
        for n in range(3):
            make_post(author, status="PENDING", title=f"Pending {n}")
        make_post(author, status="NEEDS_CHANGES")

        first = client.get(
            "/api/v1/moderation/queue?status=PENDING&limit=2",
            headers=auth_headers(admin),
        ).get_json()
        second = client.get(
            f"/api/v1/moderation/queue?status=PENDING&limit=2&cursor={first['pagination']['next_cursor']}",
            headers=auth_headers(admin),
        ).get_json()

        assert len(first["items"]) == 2
        assert first["pagination"]["has_more"] is True
        assert len(second["items"]) == 1
        titles = {item["title"] for item in first["items"] + second["items"]}
        assert titles == {"Pending 0", "Pending 1", "Pending 2"}


class TestMedia:

    def upload(self, client, user, post, name="shore.jpg", **form):
        data = {"file": (io.BytesIO(b"\xff\xd8\xff\xe0"), name)}
        data.update(form)
        return client.post(
            f"/api/v1/posts/{post.id}/media",
            data=data,
            content_type="multipart/form-data",
            headers=auth_headers(user),
        )

    def test_upload_appends_after_last_asset(self, client, author, make_post, add_media):
        post = make_post(author)
        add_media(post, 0)

        response = self.upload(client, author, post, altText="Frozen shore", sortOrder="0")

        data = response.get_json()
        assert response.status_code == 201
        assert data["sort_order"] == 1
        assert data["type"] == "PHOTO"
        assert data["mime_type"] == "image/jpeg"

    def test_upload_uses_free_position(self, client, author, make_post):
        post = make_post(author)

        response = self.upload(client, author, post, name="clip.mp4", sortOrder="3")

        data = response.get_json()
        assert data["sort_order"] == 3
        assert data["type"] == "VIDEO"

    def test_unsupported_upload_is_rejected(self, client, author, make_post):
        post = make_post(author)

        response = self.upload(client, author, post, name="notes.txt")

        assert response.status_code == 400
        assert Media.query.count() == 0

    def test_delete_media(self, client, author, other_author, make_post, add_media):
        post = make_post(author)
        media = add_media(post, 0)

        denied = client.delete(f"/api/v1/media/{media.id}", headers=auth_headers(other_author))
        deleted = client.delete(f"/api/v1/media/{media.id}", headers=auth_headers(author))
        missing = client.delete(f"/api/v1/media/{media.id}", headers=auth_headers(author))

        assert denied.status_code == 403
        assert deleted.status_code == 200
        assert missing.status_code == 404
        assert Media.query.count() == 0


class TestEssays:

    def test_only_approved_posts_are_public(self, client, author, make_post):
        make_post(author, status="PENDING", slug="pending-trek")

        assert client.get("/api/v1/essays/pending-trek").status_code == 404
        assert client.get("/api/v1/essays/nowhere").status_code == 404

    def test_essay_binds_media_to_blocks(self, client, author, make_post, add_media):
        content = blocks_json(
            {"id": "bg", "type": "background", "overlayTitle": "North"},
            {"id": "p", "type": "paragraph", "text": "Cold."},
            {"id": "g", "type": "gallery", "galleryItems": [{}, {}]},
            {"id": "m", "type": "media"},
        )
        post = make_post(author, status="APPROVED", slug="north-trek", content=content)
        assets = [add_media(post, n) for n in range(3)]

        response = client.get("/api/v1/essays/north-trek")

        body = response.get_json()["body"]
        assert response.status_code == 200
        assert "status" not in response.get_json()
        assert body["format"] == "blocks"
        assert body["cover"]["id"] == assets[0].id
        assert "media" not in body["blocks"][1]
        assert [m["id"] for m in body["blocks"][2]["media"]] == [assets[1].id, assets[2].id]
        assert body["blocks"][3]["media"] == [None]

    @pytest.mark.parametrize("content, fmt", [
        ("<p>Old <script>x()</script>entry</p>", "markup"),
        ("Old entry.\n\nSecond thought.", "plain"),
    ])
    def test_legacy_bodies_degrade(self, client, author, make_post, content, fmt):
        make_post(author, status="APPROVED", slug="old-trek", content=content)

        body = client.get("/api/v1/essays/old-trek").get_json()["body"]

        assert body["format"] == fmt
        if fmt == "markup":
            assert "script" not in body["html"]
        else:
            assert body["paragraphs"] == ["Old entry.", "Second thought."]


def test_openapi_document_is_served(client):
    response = client.get("/openapi/editorial.yaml")

    assert response.status_code == 200
    assert b"Field Notes Editorial API" in response.data


def test_non_text_decision_is_a_bad_request(client, admin, author, make_post):
    post = seeded(make_post(author, status="PENDING"))

    response = client.post(
        f"/api/v1/moderation/posts/{post.id}/review",
        json={"decision": 1},
        headers=auth_headers(admin),
    )

    assert response.status_code == 400
    assert response.get_json()["fields"] == {"decision": "Must be text"}


class TestEssayListing:

    @pytest.fixture
    def catalogue(self, author, other_author, make_post):
        def publish(owner, title, *, tags="", categories="", status="APPROVED", content=None):
            post = make_post(owner, status=status, title=title, content=content)
            rebind_taxonomy(post, tags=tags, categories=categories)
            db.session.commit()
            return post

        return {
            "lake": publish(author, "Lake Trek", tags="Lakes, Winter", categories="Trips"),
            "ridge": publish(other_author, "Ridge Walk", tags="Mountains", categories="Trips"),
            "forest": publish(
                author,
                "Forest Notes",
                categories="Essays",
                content=blocks_json({"id": "p", "type": "paragraph", "text": "Moss 100% everywhere."}),
            ),
            "draft": publish(author, "Lake Draft", tags="Lakes", status="PENDING"),
        }

    def titles(self, client, query=""):
        data = client.get(f"/api/v1/essays{query}").get_json()
        return sorted(item["title"] for item in data["items"])

    def test_lists_approved_posts_only(self, client, catalogue):
        data = client.get("/api/v1/essays").get_json()

        assert data["total"] == 3
        assert sorted(item["title"] for item in data["items"]) == ["Forest Notes", "Lake Trek", "Ridge Walk"]
        assert "status" not in data["items"][0]

    def test_search_covers_text_and_names(self, client, catalogue):
        assert self.titles(client, "?q=lake") == ["Lake Trek"]
        assert self.titles(client, "?q=otto") == ["Ridge Walk"]
        assert self.titles(client, "?q=mountain") == ["Ridge Walk"]
        assert self.titles(client, "?q=essays") == ["Forest Notes"]
        assert self.titles(client, "?q=moss") == ["Forest Notes"]

    def test_search_treats_wildcards_literally(self, client, catalogue):
        assert self.titles(client, "?q=100%25") == ["Forest Notes"]
        assert self.titles(client, "?q=%25") == ["Forest Notes"]

    def test_filters_match_names_ignoring_case(self, client, catalogue):
        assert self.titles(client, "?tag=lakes") == ["Lake Trek"]
        assert self.titles(client, "?category=trips") == ["Lake Trek", "Ridge Walk"]
        assert self.titles(client, "?author=ADA") == ["Forest Notes", "Lake Trek"]
        assert self.titles(client, "?category=Trips&author=Otto") == ["Ridge Walk"]
        assert self.titles(client, "?tag=All") == ["Forest Notes", "Lake Trek", "Ridge Walk"]

    def test_pages_with_cursor(self, client, catalogue):
        first = client.get("/api/v1/essays?limit=2").get_json()
        second = client.get(f"/api/v1/essays?limit=2&cursor={first['pagination']['next_cursor']}").get_json()

        assert len(first["items"]) == 2
        assert first["pagination"]["has_more"] is True
        assert len(second["items"]) == 1
        assert second["total"] == 3


class TestFeedbackNotes:

    def review(self, client, admin, post, decision, note):
        return client.post(
            f"/api/v1/moderation/posts/{post.id}/review",
            json={"decision": decision, "note": note},
            headers=auth_headers(admin),
        )

    def test_author_sees_notes_needing_attention(self, client, admin, author, other_author, make_post):
        changes = seeded(make_post(author, status="PENDING", title="Needs work"))
        rejected = seeded(make_post(author, status="PENDING", title="Off topic"))
        approved = seeded(make_post(author, status="PENDING", title="Lovely"))
        foreign = seeded(make_post(other_author, status="PENDING", title="Not mine"))

        self.review(client, admin, changes, "needs-changes", "Add captions")
        self.review(client, admin, rejected, "reject", "Not a field note")
        self.review(client, admin, approved, "approve", "Great photos")
        self.review(client, admin, foreign, "reject", "Nope")

        response = client.get("/api/v1/editor/notes", headers=auth_headers(author))

        data = response.get_json()
        assert response.status_code == 200
        assert [item["text"] for item in data["items"]] == ["Not a field note", "Add captions"]
        assert data["items"][0]["post"]["title"] == "Off topic"
        assert data["items"][0]["post"]["status"] == "REJECTED"
        assert data["items"][1]["revision"] == 1

    def test_feed_requires_sign_in(self, client):
        response = client.get("/api/v1/editor/notes")

        assert response.status_code == 401
