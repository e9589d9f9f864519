"""YouTube URL parsing and oEmbed metadata lookup for admin video creation."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qs, urlparse

import httpx

from app.core.settings import settings

logger = logging.getLogger("app.youtube")

OEMBED_URL = "https://www.youtube.com/oembed"
_ID_RE = re.compile(r"^[A-Za-z0-9_-]{11}$")


@dataclass
class VideoMetadata:
    title: str
    thumbnail_url: str
    author_name: Optional[str] = None
    from_oembed: bool = True


def extract_video_id(url: str) -> Optional[str]:
    """Canonical 11-character id from watch, short, embed, shorts or live URLs."""
    if not url:
        return None
    url = url.strip()
    if _ID_RE.match(url):
        return url

    parsed = urlparse(url if "://" in url else f"https://{url}")
    host = (parsed.hostname or "").lower()
    if host.startswith("www."):
        host = host[4:]
    if host.startswith("m."):
        host = host[2:]

    candidate = None
    if host == "youtu.be":
        candidate = parsed.path.lstrip("/").split("/")[0]
    elif host in ("youtube.com", "music.youtube.com", "youtube-nocookie.com"):
        if parsed.path == "/watch":
            candidate = (parse_qs(parsed.query).get("v") or [None])[0]
        else:
            parts = [p for p in parsed.path.split("/") if p]
            if len(parts) >= 2 and parts[0] in ("embed", "shorts", "live", "v"):
                candidate = parts[1]

    if candidate and _ID_RE.match(candidate):
        return candidate
    return None


def thumbnail_for(video_id: str) -> str:
    return f"https://img.youtube.com/vi/{video_id}/hqdefault.jpg"


def fetch_oembed(video_id: str) -> Optional[dict]:
    """Raw oEmbed payload, or None when the lookup fails."""
    try:
        with httpx.Client(timeout=settings.http_timeout_seconds) as client:
            response = client.get(
                OEMBED_URL,
                params={"url": f"https://www.youtube.com/watch?v={video_id}", "format": "json"},
            )
        if response.status_code != 200:
            logger.warning(f"oEmbed lookup for {video_id} returned {response.status_code}")
            return None
        return response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.warning(f"oEmbed lookup for {video_id} failed: {e}")
        return None


def get_video_metadata(video_id: str) -> VideoMetadata:
    data = fetch_oembed(video_id)
    if not data:
        return VideoMetadata(
            title=f"YouTube Video {video_id}",
            thumbnail_url=thumbnail_for(video_id),
            from_oembed=False,
        )
    return VideoMetadata(
        title=data.get("title") or f"YouTube Video {video_id}",
        thumbnail_url=data.get("thumbnail_url") or thumbnail_for(video_id),
        author_name=data.get("author_name"),
    )
