from fieldnotes.domain.document.blocks import BODY_BLOCKS, BackgroundBlock, parse_body
from fieldnotes.domain.document.bindings import resolve_media_bindings
from .block import normalize_binding
from .media import normalize_media


def normalize_body(post, admin=False):
    """
    Render contract for a post body.

    - blocks: every block with its positionally bound media
    - markup: sanitized HTML of a legacy body
    - plain:  paragraphs of a legacy plain-text body
    """
    body = parse_body(post.content)

    if body.format != BODY_BLOCKS:
        return {
            "format": body.format,
            "html": body.markup or None,
            "paragraphs": list(body.paragraphs),
        }

    ordered_media = sorted(post.media, key=lambda m: m.sort_order)
    bindings = resolve_media_bindings(body.blocks, ordered_media)

    cover = next(
        (b for b in bindings if isinstance(b.block, BackgroundBlock)),
        None,
    )

    return {
        "format": body.format,
        "blocks": [normalize_binding(b, admin=admin) for b in bindings],
        "cover": normalize_media(cover.first_asset, admin=admin) if cover else None,
    }


def normalize_post(post, admin=False):
    data = {
        "id": post.id,
        "title": post.title,
        "slug": post.slug,
        "excerpt": post.excerpt,
        "seo": {
            "title": post.seo_title,
            "description": post.seo_description,
        },
        "read_time_min": post.read_time_min,
        "author": {"id": post.author.id, "name": post.author.name},
        "tags": [tag.name for tag in post.tags],
        "categories": [category.name for category in post.categories],
        "created_at": post.created_at.isoformat(),
        "body": normalize_body(post, admin=admin),
    }

    if admin:
        data["status"] = post.status
        data["revision"] = post.revision
        data["content"] = post.content
        data["media"] = [normalize_media(m, admin=True) for m in post.media]

    return data


def normalize_queue_item(post):
    return {
        "id": post.id,
        "title": post.title,
        "slug": post.slug,
        "status": post.status,
        "revision": post.revision,
        "author": {"id": post.author.id, "name": post.author.name},
        "media_count": len(post.media),
        "categories": [category.name for category in post.categories],
        "created_at": post.created_at.isoformat(),
    }


def normalize_post_summary(post):
    """Card shape for the public listing."""
    return {
        "id": post.id,
        "title": post.title,
        "slug": post.slug,
        "excerpt": post.excerpt,
        "read_time_min": post.read_time_min,
        "author": {"id": post.author.id, "name": post.author.name},
        "tags": [tag.name for tag in post.tags],
        "categories": [category.name for category in post.categories],
        "media_count": len(post.media),
        "created_at": post.created_at.isoformat(),
    }
