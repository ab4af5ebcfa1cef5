from flask import current_app, jsonify, request
from fieldnotes.models.post import Post
from fieldnotes.application.editorial.public_listing import public_posts_query
from fieldnotes.domain.lifecycle.post import PUBLIC_STATUS
from fieldnotes.normalizers.pagination import normalize_pagination
from fieldnotes.normalizers.post import normalize_post, normalize_post_summary
from fieldnotes.utils.pagination import paginate_cursor, parse_limit
from . import v1_bp


@v1_bp.route("/essays", methods=["GET"])
def list_essays():
    query = public_posts_query(
        q=request.args.get("q"),
        tag=request.args.get("tag"),
        category=request.args.get("category"),
        author=request.args.get("author"),
    )
    total = query.count()

    items, cursor = paginate_cursor(
        query,
        model=Post,
        cursor=request.args.get("cursor"),
        limit=parse_limit(
            request.args.get("limit"),
            default=current_app.config["PUBLIC_PAGE_SIZE"],
            maximum=current_app.config["PUBLIC_MAX_PAGE_SIZE"],
        ),
    )

    response = normalize_pagination(items, normalize_post_summary, cursor=cursor)
    response["total"] = total
    return jsonify(response), 200


@v1_bp.route("/essays/<slug>", methods=["GET"])
def get_essay(slug):
    post = Post.query.filter_by(
        slug=slug,
        status=PUBLIC_STATUS.value
    ).first_or_404()

    return jsonify(normalize_post(post, admin=False))
