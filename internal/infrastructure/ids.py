"""
Identifier generation for catalog entities.
"""
import re
from uuid import uuid4


def slugify(text: str) -> str:
    """Lower-case ``text`` and collapse non-alphanumerics into dashes."""
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")


def generate_id(prefix: str = "id") -> str:
    """
    Generate a fresh opaque identifier.

    Args:
        prefix: Readable prefix, e.g. "feat" or a slugified category name.

    Returns:
        Identifier of the form ``<prefix>-<12 hex chars>``.
    """
    return f"{slugify(prefix) or 'id'}-{uuid4().hex[:12]}"
