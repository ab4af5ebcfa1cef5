# fieldnotes/api/v1/editor.py
from flask import g, request, jsonify
from fieldnotes.application.editorial.access import load_post_for_actor
from fieldnotes.application.editorial.autosave_post import autosave_post
from fieldnotes.application.editorial.submit_post import submit_post
from fieldnotes.application.editorial.restore_revision import restore_revision
from fieldnotes.normalizers.post import normalize_post
from fieldnotes.models.admin_note import AdminNote
from fieldnotes.models.post import Post
from fieldnotes.domain.lifecycle.post import NOTE_REQUIRED
from fieldnotes.normalizers.pagination import normalize_pagination
from fieldnotes.normalizers.revision import normalize_revision, normalize_admin_note, normalize_feedback_item
from fieldnotes.utils.pagination import paginate_cursor, parse_limit
from fieldnotes.utils.decorators import login_required
from . import v1_bp


# ------------------------
# Draft channel
# ------------------------

@v1_bp.route("/editor/autosave", methods=["POST"])
@login_required
def autosave():
    data = request.get_json(silent=True) or {}

    post_id = autosave_post(actor=g.current_user, data=data)

    return jsonify({"postId": post_id}), 200


# ------------------------
# Explicit save / submit
# ------------------------

@v1_bp.route("/editor/posts", methods=["POST"])
@login_required
def save_post():
    data = request.get_json(silent=True) or request.form.to_dict()

    result = submit_post(actor=g.current_user, data=data)

    if "redirect" in result:
        return jsonify({
            "status": "published",
            "postId": result["post_id"],
            "revision": result["revision"],
            "redirect": result["redirect"],
        }), 200

    return jsonify({
        "status": "submitted",
        "postId": result["post_id"],
        "postStatus": result["status"],
        "revision": result["revision"],
    }), 200


@v1_bp.route("/editor/posts/<post_id>", methods=["GET"])
@login_required
def get_post_for_editing(post_id):
    post = load_post_for_actor(post_id, g.current_user)

    data = normalize_post(post, admin=True)
    data["notes"] = [normalize_admin_note(n) for n in reversed(post.admin_notes)]
    data["revisions"] = [normalize_revision(r) for r in reversed(post.revisions)]

    return jsonify(data), 200


# ------------------------
# Feedback
# ------------------------

@v1_bp.route("/editor/notes", methods=["GET"])
@login_required
def feedback_notes():
    """Admin notes on the caller's posts that still need their attention."""
    query = (
        AdminNote.query
        .join(Post, AdminNote.post_id == Post.id)
        .filter(
            Post.author_id == g.current_user.id,
            Post.status.in_([status.value for status in NOTE_REQUIRED]),
        )
    )

    items, cursor = paginate_cursor(
        query,
        model=AdminNote,
        cursor=request.args.get("cursor"),
        limit=parse_limit(request.args.get("limit"), default=50),
    )

    return jsonify(normalize_pagination(items, normalize_feedback_item, cursor=cursor)), 200


# ------------------------
# Revisions
# ------------------------

@v1_bp.route("/editor/revisions/<revision_id>/restore", methods=["POST"])
@login_required
def restore(revision_id):
    data = request.get_json(silent=True) or {}

    result = restore_revision(
        actor=g.current_user,
        revision_id=revision_id,
        status_hint=data.get("status"),
    )

    return jsonify({
        "message": f"Restored revision {result['restored_from']}",
        "postId": result["post_id"],
        "postStatus": result["status"],
        "revision": result["revision"],
    }), 200
