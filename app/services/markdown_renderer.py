from __future__ import annotations

import re
from typing import Iterable, Optional
import bleach
from markdown import Markdown

_ALLOWED_TAGS: set[str] = {
    "p", "pre", "code", "blockquote", "strong", "em", "u", "del", "hr",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "ul", "ol", "li",
    "table", "thead", "tbody", "tr", "th", "td",
    "a", "span", "br", "img",
}
_ALLOWED_ATTRS: dict[str, Iterable[str]] = {
    "a": ["href", "title", "target", "rel"],
    "img": ["src", "alt", "title"],
    "span": ["class", "lang"],
    "code": ["class"],
    "pre": ["class"],
    "h1": ["id"], "h2": ["id"], "h3": ["id"], "h4": ["id"], "h5": ["id"], "h6": ["id"],
}
_WS_RE = re.compile(r"\s+")

EXCERPT_LENGTH = 200


def render_markdown(md: str) -> str:
    """Render Markdown -> sanitized HTML for blog and news bodies."""
    md_engine = Markdown(
        extensions=[
            "extra",
            "sane_lists",
            # no 'smarty': it rewrites quotes inside transliterated Sanskrit
            "nl2br",
        ],
        output_format="html",
    )
    html = md_engine.convert(md or "")
    clean = bleach.clean(
        html,
        tags=_ALLOWED_TAGS,
        attributes=_ALLOWED_ATTRS,
        protocols=["http", "https", "mailto"],
        strip=True,
    )
    clean = bleach.linkify(clean, callbacks=[], skip_tags=["pre", "code"], parse_email=False)
    return clean


def plain_text(md: str) -> str:
    """Rendered body with every tag stripped and whitespace collapsed."""
    text = bleach.clean(render_markdown(md), tags=set(), strip=True)
    return _WS_RE.sub(" ", text).strip()


def make_excerpt(md: str, excerpt: Optional[str] = None, length: int = EXCERPT_LENGTH) -> str:
    """Explicit excerpt if given, else the first ``length`` characters of the body text."""
    if excerpt and excerpt.strip():
        return excerpt.strip()
    text = plain_text(md)
    if len(text) <= length:
        return text
    cut = text[:length].rsplit(" ", 1)[0] or text[:length]
    return cut.rstrip(",;:.") + "..."
