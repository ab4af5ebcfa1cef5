# fieldnotes/api/v1/media.py
from flask import g, request, jsonify
from fieldnotes.application.editorial.upload_media import upload_media
from fieldnotes.application.editorial.delete_media import delete_media
from fieldnotes.domain.invariants.exceptions import ValidationError
from fieldnotes.utils.decorators import login_required
from . import v1_bp


@v1_bp.route("/posts/<post_id>/media", methods=["POST"])
@login_required
def upload(post_id):
    upload_file = request.files.get("file")
    if upload_file is None:
        raise ValidationError("A file is required", {"file": "A file is required"})

    sort_order = request.form.get("sortOrder", type=int)

    result = upload_media(
        actor=g.current_user,
        post_id=post_id,
        filename=upload_file.filename,
        payload=upload_file.read(),
        declared_type=upload_file.mimetype,
        alt_text=request.form.get("altText"),
        sort_order=sort_order,
    )

    return jsonify(result), 201


@v1_bp.route("/media/<media_id>", methods=["DELETE"])
@login_required
def remove(media_id):
    delete_media(actor=g.current_user, media_id=media_id)
    return jsonify({"ok": True}), 200
