"""
Usage metrics for the admin dashboard.
Counts users and content; recent/active windows are relative to now.
"""

import logging
from datetime import timedelta
from typing import Dict, Any, Optional
from sqlalchemy.orm import Session

from app.models.baby_name import BabyName
from app.models.blog_post import BlogPost
from app.models.lexeme import Lexeme
from app.models.news_item import NewsItem
from app.models.user import User
from app.models.video import Video
from app.utils.datetime import db_now

logger = logging.getLogger("app.metrics")

RECENT_SIGNUP_DAYS = 7
ACTIVE_USER_DAYS = 30


def get_user_metrics(db: Session, now=None) -> Dict[str, Any]:
    """Total users, signups in the last week, logins in the last month."""
    now = now or db_now()
    total_users = db.query(User).count()
    recent_signups = db.query(User).filter(
        User.created_at >= now - timedelta(days=RECENT_SIGNUP_DAYS)
    ).count()
    active_users = db.query(User).filter(
        User.last_login.isnot(None),
        User.last_login >= now - timedelta(days=ACTIVE_USER_DAYS),
    ).count()
    return {
        "total": total_users,
        "recent_signups": recent_signups,
        "active_users": active_users,
    }


def get_content_metrics(db: Session) -> Dict[str, Any]:
    """Row counts per content table; blog posts split by status."""
    return {
        "lexemes": db.query(Lexeme).count(),
        "enriched_lexemes": db.query(Lexeme).filter(Lexeme.baby_name_checked.is_(True)).count(),
        "baby_names": db.query(BabyName).count(),
        "videos": db.query(Video).count(),
        "blog_posts": db.query(BlogPost).count(),
        "published_blogs": db.query(BlogPost).filter(BlogPost.status == "published").count(),
        "draft_blogs": db.query(BlogPost).filter(BlogPost.status == "draft").count(),
        "news": db.query(NewsItem).count(),
    }


def get_overview(db: Session, now: Optional[Any] = None) -> Dict[str, Any]:
    overview = {
        "users": get_user_metrics(db, now),
        "content": get_content_metrics(db),
    }
    logger.info(f"Stats overview: {overview['users']['total']} users, {overview['content']['lexemes']} lexemes")
    return overview
