from fieldnotes.domain.document.blocks import block_to_dict
from .media import normalize_media


def normalize_binding(binding, admin=False):
    """A block in editor wire shape plus the assets bound to its slots."""
    data = block_to_dict(binding.block)

    if binding.assets:
        data["media"] = [normalize_media(asset, admin=admin) for asset in binding.assets]

    return data
