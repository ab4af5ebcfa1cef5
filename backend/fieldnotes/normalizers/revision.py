def normalize_revision(revision):
    return {
        "id": revision.id,
        "revision": revision.revision,
        "title": revision.title,
        "excerpt": revision.excerpt,
        "content": revision.content,
        "seo_title": revision.seo_title,
        "seo_description": revision.seo_description,
        "created_at": revision.created_at.isoformat(),
    }


def normalize_admin_note(note):
    return {
        "id": note.id,
        "admin_id": note.admin_id,
        "text": note.text,
        "revision": note.revision,
        "created_at": note.created_at.isoformat(),
    }


def normalize_feedback_item(note):
    """An admin note as it appears in the author's notes feed."""
    data = normalize_admin_note(note)
    data["post"] = {
        "id": note.post.id,
        "title": note.post.title,
        "slug": note.post.slug,
        "status": note.post.status,
    }
    return data
