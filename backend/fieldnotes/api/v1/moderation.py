# fieldnotes/api/v1/moderation.py
from flask import g, request, jsonify
from fieldnotes.extensions import db
from fieldnotes.models.post import Post
from fieldnotes.models.user import ROLE_ADMIN
from fieldnotes.application.editorial.review_post import review_post
from fieldnotes.domain.lifecycle.post import PostStatus
from fieldnotes.normalizers.pagination import normalize_pagination
from fieldnotes.normalizers.post import normalize_queue_item
from fieldnotes.utils.decorators import login_required, roles_required
from fieldnotes.utils.pagination import paginate_cursor, parse_limit
from . import v1_bp

QUEUE_STATUSES = (PostStatus.PENDING.value, PostStatus.NEEDS_CHANGES.value)


@v1_bp.route("/moderation/posts/<post_id>/review", methods=["POST"])
@login_required
@roles_required(ROLE_ADMIN)
def review(post_id):
    data = request.get_json(silent=True) or {}

    result = review_post(
        actor=g.current_user,
        post_id=post_id,
        decision=data.get("decision", ""),
        note=data.get("note"),
    )

    return jsonify({
        "postId": result["post_id"],
        "status": result["status"],
        "applied": result["applied"],
    }), 200


@v1_bp.route("/moderation/queue", methods=["GET"])
@login_required
@roles_required(ROLE_ADMIN)
def moderation_queue():
    status = request.args.get("status")
    statuses = (status,) if status in QUEUE_STATUSES else QUEUE_STATUSES

    query = Post.query.filter(Post.status.in_(statuses))
    items, cursor = paginate_cursor(
        query,
        model=Post,
        cursor=request.args.get("cursor"),
        limit=parse_limit(request.args.get("limit")),
    )

    counts = dict(
        db.session.query(Post.status, db.func.count(Post.id))
        .filter(Post.status.in_(QUEUE_STATUSES))
        .group_by(Post.status)
        .all()
    )

    response = normalize_pagination(items, normalize_queue_item, cursor=cursor)
    response["counts"] = {s: counts.get(s, 0) for s in QUEUE_STATUSES}
    return jsonify(response), 200
