import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.db import get_db
from app.exceptions import NotFoundException
from app.models.news_item import NewsItem
from app.models.user import User
from app.schemas.content import NewsItemCreate, NewsItemList, NewsItemOut, NewsItemUpdate
from app.services.audit import log_admin_action
from app.services.auth import admin_or_public, require_admin
from app.services.markdown_renderer import render_markdown
from app.services.publishing import PUBLISHED, published_at_for
from app.utils.datetime import utc_now
from app.utils.pagination import PageParams, paginate
from app.utils.slugs import available_slug, slugify

logger = logging.getLogger("app.routes.admin_news")

router = APIRouter(prefix="/api/admin/news", tags=["Admin News"])


@router.get("", response_model=NewsItemList)
def list_news(
    status: Optional[str] = Query(None),
    page: PageParams = Depends(),
    db: Session = Depends(get_db),
    admin: Optional[User] = Depends(admin_or_public),
):
    q = db.query(NewsItem)
    if admin is None:
        q = q.filter(NewsItem.status == PUBLISHED)
    elif status and status != "all":
        q = q.filter(NewsItem.status == status)
    q = q.order_by(func.coalesce(NewsItem.published_at, NewsItem.created_at).desc(), NewsItem.id.desc())
    rows, total = paginate(q, page)
    return page.envelope("news", rows, total)


@router.get("/{news_id}", response_model=NewsItemOut)
def get_news_item(news_id: int, db: Session = Depends(get_db), admin: Optional[User] = Depends(admin_or_public)):
    item = db.get(NewsItem, news_id)
    if not item or (admin is None and item.status != PUBLISHED):
        raise NotFoundException("News item not found")
    return item


@router.post("", response_model=NewsItemOut)
def create_news_item(
    payload: NewsItemCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    item = NewsItem(
        title=payload.title,
        slug=available_slug(db, NewsItem, slugify(payload.title, int(utc_now().timestamp()), prefix="news")),
        content_markdown=payload.content_markdown,
        content_html=render_markdown(payload.content_markdown),
        source_url=payload.source_url,
        source_name=payload.source_name,
        status=payload.status,
        published_at=published_at_for(None, payload.status, None),
        created_by=admin.id,
    )
    db.add(item)
    db.flush()
    log_admin_action(db, admin.id, "create", "news", item.id, {"title": item.title, "status": item.status})
    db.refresh(item)
    return item


@router.put("/{news_id}", response_model=NewsItemOut)
def update_news_item(
    news_id: int,
    payload: NewsItemUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    item = db.get(NewsItem, news_id)
    if not item:
        raise NotFoundException("News item not found")
    data = payload.model_dump(exclude_unset=True)
    previous_status = item.status

    if data.get("title") and data["title"] != item.title:
        item.slug = available_slug(db, NewsItem, slugify(data["title"], item.id, prefix="news"), exclude_id=item.id)
        item.title = data["title"]
    if data.get("content_markdown") is not None:
        item.content_markdown = data["content_markdown"]
        item.content_html = render_markdown(item.content_markdown)
    for field in ("source_url", "source_name"):
        if field in data:
            setattr(item, field, data[field])
    if data.get("status"):
        item.status = data["status"]
        item.published_at = published_at_for(previous_status, item.status, item.published_at)

    db.add(item)
    log_admin_action(db, admin.id, "update", "news", item.id, {"fields": sorted(data), "status": item.status})
    db.refresh(item)
    return item


@router.delete("/{news_id}")
def delete_news_item(news_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    item = db.get(NewsItem, news_id)
    if not item:
        raise NotFoundException("News item not found")
    title = item.title
    db.delete(item)
    log_admin_action(db, admin.id, "delete", "news", news_id, {"title": title})
    return {"deleted": True}
