"""
Entry classification from free-text tags.
"""

from core.config import LEAVE_TAGS, REMOTE_TAG
from models.entries import Classification


def normalize_tags(tags: str | None) -> str:
    """Lowercase tag text; missing tags become the empty string."""
    if not tags:
        return ""
    return str(tags).lower()


def is_leave(tags: str | None) -> bool:
    """Check if the tags mark vacation or leave (ferie, permesso)."""
    text = normalize_tags(tags)
    return any(token in text for token in LEAVE_TAGS)


def is_remote(tags: str | None) -> bool:
    """Check if the tags mark remote work (any 'remot*' variant)."""
    return REMOTE_TAG in normalize_tags(tags)


def classify(tags: str | None) -> Classification:
    """Decide whether a row counts as worked time or leave."""
    if is_leave(tags):
        return Classification.LEAVE
    return Classification.WORKED
