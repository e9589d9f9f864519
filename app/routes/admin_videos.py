import logging
from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.db import get_db
from app.exceptions import NotFoundException, ValidationException
from app.models.user import User
from app.models.video import Video
from app.schemas.content import VideoCreate, VideoList, VideoOut, VideoUpdate
from app.services.audit import log_admin_action
from app.services.auth import admin_or_public, require_admin
from app.services.youtube import extract_video_id, get_video_metadata
from app.utils.datetime import db_now, to_naive_utc
from app.utils.pagination import PageParams, paginate
from app.utils.slugs import available_slug, slugify

logger = logging.getLogger("app.routes.admin_videos")

router = APIRouter(prefix="/api/admin/videos", tags=["Admin Videos"])


@router.get("", response_model=VideoList)
def list_videos(
    category: Optional[str] = None,
    page: PageParams = Depends(),
    db: Session = Depends(get_db),
    admin: Optional[User] = Depends(admin_or_public),
):
    """Admin listing; also serves the public videos page via ``userId=public``."""
    q = db.query(Video)
    if category:
        q = q.filter(Video.category == category)
    q = q.order_by(func.coalesce(Video.published_at, Video.created_at).desc(), Video.id.desc())
    rows, total = paginate(q, page)
    return page.envelope("videos", rows, total)


@router.get("/{video_id}", response_model=VideoOut)
def get_video(video_id: int, db: Session = Depends(get_db), admin: Optional[User] = Depends(admin_or_public)):
    video = db.get(Video, video_id)
    if not video:
        raise NotFoundException("Video not found")
    return video


@router.post("", response_model=VideoOut)
def create_video(
    payload: VideoCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    youtube_id = extract_video_id(payload.youtube_url)
    if not youtube_id:
        raise ValidationException("Invalid YouTube URL")

    meta = get_video_metadata(youtube_id)
    title = payload.title or meta.title
    video = Video(
        title=title,
        slug=available_slug(db, Video, slugify(title, youtube_id, prefix="video")),
        youtube_url=payload.youtube_url.strip(),
        youtube_id=youtube_id,
        description=payload.description,
        duration=payload.duration,
        category=payload.category,
        thumbnail_url=meta.thumbnail_url,
        published_at=to_naive_utc(payload.published_at) or db_now(),
        created_by=admin.id,
    )
    db.add(video)
    db.flush()
    log_admin_action(db, admin.id, "create", "video", video.id,
                     {"title": video.title, "youtube_id": youtube_id, "oembed": meta.from_oembed})
    db.refresh(video)
    return video


@router.put("/{video_id}", response_model=VideoOut)
def update_video(
    video_id: int,
    payload: VideoUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    video = db.get(Video, video_id)
    if not video:
        raise NotFoundException("Video not found")
    data = payload.model_dump(exclude_unset=True)
    if "published_at" in data:
        data["published_at"] = to_naive_utc(data["published_at"])
    if data.get("title") and data["title"] != video.title:
        video.slug = available_slug(db, Video, slugify(data["title"], video.youtube_id, prefix="video"), exclude_id=video.id)
    for k, v in data.items():
        setattr(video, k, v)
    db.add(video)
    log_admin_action(db, admin.id, "update", "video", video.id, {"fields": sorted(data)})
    db.refresh(video)
    return video


@router.delete("/{video_id}")
def delete_video(video_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    video = db.get(Video, video_id)
    if not video:
        raise NotFoundException("Video not found")
    title = video.title
    db.delete(video)
    log_admin_action(db, admin.id, "delete", "video", video_id, {"title": title})
    return {"deleted": True}
