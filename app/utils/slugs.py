from __future__ import annotations
import re
from typing import Any

from sqlalchemy.orm import Session

__all__ = ["slugify", "unique_slug", "available_slug"]

_STRIP_RE = re.compile(r"[^\w\s-]", re.ASCII)
_SPACE_RE = re.compile(r"\s+")
_DASHES_RE = re.compile(r"-+")


def slugify(text: str, fallback_id: Any, prefix: str = "name") -> str:
    """ASCII slug of ``text``; ``<prefix>-<id>`` when nothing usable is left.

    Devanagari-only input strips to nothing, hence the fallback.
    """
    slug = _STRIP_RE.sub("", (text or "").lower())
    slug = _SPACE_RE.sub("-", slug)
    slug = _DASHES_RE.sub("-", slug).strip("-")
    if len(slug) < 2:
        slug = f"{prefix}-{fallback_id}"
    return slug


def _taken(db: Session, model, slug: str, exclude_id: Any = None) -> bool:
    q = db.query(model.id).filter(model.slug == slug)
    if exclude_id is not None:
        q = q.filter(model.id != exclude_id)
    return q.first() is not None


def unique_slug(db: Session, model, base_slug: str, suffix: Any, exclude_id: Any = None) -> str:
    """Return ``base_slug`` unless taken in ``model``, else ``<base_slug>-<suffix>``."""
    return f"{base_slug}-{suffix}" if _taken(db, model, base_slug, exclude_id) else base_slug


def available_slug(db: Session, model, base_slug: str, exclude_id: Any = None) -> str:
    """``base_slug``, or the first free ``<base_slug>-2``, ``-3``, ... in ``model``."""
    slug, n = base_slug, 1
    while _taken(db, model, slug, exclude_id):
        n += 1
        slug = f"{base_slug}-{n}"
    return slug
