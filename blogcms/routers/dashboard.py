from typing import Any, Dict, List
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import desc, func
from sqlmodel import Session, select

from blogcms.core.rate_limit import rate_limit
from blogcms.db.session import get_session
from blogcms.models.media import Media
from blogcms.models.post import Post
from blogcms.routers.auth import TokenUser, get_current_user

router = APIRouter(dependencies=[Depends(rate_limit)])


class DashboardStats(BaseModel):
    totalPosts: int
    publishedPosts: int
    totalMedia: int
    recentPosts: List[Dict[str, Any]]


@router.get("/stats")
def get_dashboard_stats(
    current_user: TokenUser = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Get dashboard statistics"""
    total_posts = session.exec(select(func.count(Post.id))).first() or 0
    published_posts = session.exec(
        select(func.count(Post.id)).where(Post.published == True)  # noqa: E712
    ).first() or 0
    total_media = session.exec(select(func.count(Media.id))).first() or 0

    recent_posts = session.exec(
        select(Post).order_by(desc(Post.created_at), desc(Post.id)).limit(5)
    ).all()

    recent_posts_data = []
    for post in recent_posts:
        recent_posts_data.append({
            "id": post.id,
            "title_en": post.title_en,
            "title_zh": post.title_zh,
            "created_at": post.created_at.isoformat(),
            "published": post.published,
        })

    return {
        "stats": DashboardStats(
            totalPosts=total_posts,
            publishedPosts=published_posts,
            totalMedia=total_media,
            recentPosts=recent_posts_data,
        )
    }
