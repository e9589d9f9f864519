import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.db import get_db
from app.exceptions import NotFoundException
from app.models.blog_post import BlogPost
from app.models.user import User
from app.schemas.content import BlogPostCreate, BlogPostList, BlogPostOut, BlogPostUpdate
from app.services.audit import log_admin_action
from app.services.auth import admin_or_public, require_admin
from app.services.markdown_renderer import make_excerpt, render_markdown
from app.services.publishing import PUBLISHED, published_at_for
from app.utils.datetime import utc_now
from app.utils.pagination import PageParams, paginate
from app.utils.slugs import available_slug, slugify

logger = logging.getLogger("app.routes.admin_blog")

router = APIRouter(prefix="/api/admin/blog", tags=["Admin Blog"])


@router.get("", response_model=BlogPostList)
def list_posts(
    status: Optional[str] = Query(None),
    page: PageParams = Depends(),
    db: Session = Depends(get_db),
    admin: Optional[User] = Depends(admin_or_public),
):
    """Admin listing; public readers (``userId=public``) only ever see published posts."""
    if admin is None or status == PUBLISHED:
        q = db.query(BlogPost).filter(BlogPost.status == PUBLISHED).order_by(BlogPost.published_at.desc())
    else:
        q = db.query(BlogPost)
        if status and status != "all":
            q = q.filter(BlogPost.status == status)
        q = q.order_by(BlogPost.created_at.desc())
    rows, total = paginate(q.order_by(BlogPost.id.desc()), page)
    return page.envelope("posts", rows, total)


@router.get("/{post_id}", response_model=BlogPostOut)
def get_post(post_id: int, db: Session = Depends(get_db), admin: Optional[User] = Depends(admin_or_public)):
    post = db.get(BlogPost, post_id)
    if not post or (admin is None and post.status != PUBLISHED):
        raise NotFoundException("Post not found")
    return post


@router.post("", response_model=BlogPostOut)
def create_post(
    payload: BlogPostCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    post = BlogPost(
        title=payload.title,
        slug=available_slug(db, BlogPost, slugify(payload.title, int(utc_now().timestamp()), prefix="post")),
        content_markdown=payload.content_markdown,
        content_html=render_markdown(payload.content_markdown),
        excerpt=make_excerpt(payload.content_markdown, payload.excerpt),
        status=payload.status,
        published_at=published_at_for(None, payload.status, None),
        author_id=admin.id,
    )
    db.add(post)
    db.flush()
    log_admin_action(db, admin.id, "create", "blog_post", post.id, {"title": post.title, "status": post.status})
    db.refresh(post)
    return post


@router.put("/{post_id}", response_model=BlogPostOut)
def update_post(
    post_id: int,
    payload: BlogPostUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    post = db.get(BlogPost, post_id)
    if not post:
        raise NotFoundException("Post not found")
    data = payload.model_dump(exclude_unset=True)
    previous_status = post.status

    if data.get("title") and data["title"] != post.title:
        post.slug = available_slug(db, BlogPost, slugify(data["title"], post.id, prefix="post"), exclude_id=post.id)
        post.title = data["title"]
    if data.get("content_markdown") is not None:
        post.content_markdown = data["content_markdown"]
        post.content_html = render_markdown(post.content_markdown)
    if "excerpt" in data or not post.excerpt:
        post.excerpt = make_excerpt(post.content_markdown, data.get("excerpt"))
    if data.get("status"):
        post.status = data["status"]
        post.published_at = published_at_for(previous_status, post.status, post.published_at)

    db.add(post)
    log_admin_action(db, admin.id, "update", "blog_post", post.id,
                     {"fields": sorted(data), "status": post.status, "previous_status": previous_status})
    db.refresh(post)
    return post


@router.delete("/{post_id}")
def delete_post(post_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    post = db.get(BlogPost, post_id)
    if not post:
        raise NotFoundException("Post not found")
    title = post.title
    db.delete(post)
    log_admin_action(db, admin.id, "delete", "blog_post", post_id, {"title": title})
    return {"deleted": True}
