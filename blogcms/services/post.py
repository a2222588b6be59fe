import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy import case, desc, func
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select, or_

from blogcms.core.timeutils import utc_now

from blogcms.models.post import Post, PostPublic
from blogcms.models.user import User

logger = logging.getLogger(__name__)


class DuplicateSlugError(Exception):
    pass


@dataclass
class PostFilters:
    category: Optional[str] = None
    published: Optional[bool] = None
    search: Optional[str] = None


class PostService:
    def __init__(self, session: Session):
        self.session = session

    def _conditions(self, filters: PostFilters) -> list:
        conditions = []
        if filters.category:
            conditions.append(Post.category == filters.category)
        if filters.published is not None:
            conditions.append(Post.published == filters.published)
        if filters.search:
            term = f"%{filters.search}%"
            conditions.append(or_(
                Post.title_en.ilike(term),
                Post.title_zh.ilike(term),
                Post.content_en.ilike(term),
                Post.content_zh.ilike(term),
            ))
        return conditions

    def _with_author(self):
        return select(Post, User.username).outerjoin(User, Post.author_id == User.id)

    @staticmethod
    def to_public(post: Post, author_name: Optional[str]) -> PostPublic:
        data = post.model_dump()
        data["tags"] = post.tags or []
        data["author_name"] = author_name
        return PostPublic(**data)

    def list_posts(self, filters: PostFilters, page: int, limit: int) -> Tuple[List[PostPublic], int]:
        conditions = self._conditions(filters)

        total = self.session.exec(
            select(func.count()).select_from(Post).where(*conditions)
        ).one()

        rows = self.session.exec(
            self._with_author()
            .where(*conditions)
            .order_by(desc(Post.created_at), desc(Post.id))
            .offset((page - 1) * limit)
            .limit(limit)
        ).all()

        return [self.to_public(post, author_name) for post, author_name in rows], total

    def get_post(self, post_id: int) -> Optional[PostPublic]:
        row = self.session.exec(self._with_author().where(Post.id == post_id)).first()
        if not row:
            return None
        return self.to_public(*row)

    def get_post_by_slug(self, slug: str) -> Optional[PostPublic]:
        # One post's slug_zh may equal another's slug_en; the English slug wins
        row = self.session.exec(
            self._with_author()
            .where(or_(Post.slug_en == slug, Post.slug_zh == slug))
            .order_by(case((Post.slug_en == slug, 0), else_=1))
        ).first()
        if not row:
            return None
        return self.to_public(*row)

    def _commit(self, post: Post) -> Post:
        self.session.add(post)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateSlugError(str(e.orig)) from e
        self.session.refresh(post)
        return post

    def create_post(self, data: Dict[str, Any], author_id: int) -> Post:
        post = Post(**data, author_id=author_id)
        post.tags = list(data.get("tags") or [])
        if post.published:
            post.published_at = utc_now()

        post = self._commit(post)
        logger.info("Created post %s (%s)", post.id, post.slug_en)
        return post

    def update_post(self, post_id: int, data: Dict[str, Any]) -> Optional[Post]:
        post = self.session.get(Post, post_id)
        if not post:
            return None

        was_published = post.published
        for key, value in data.items():
            setattr(post, key, value)
        post.tags = list(data.get("tags") or [])

        if not post.published:
            post.published_at = None
        elif not was_published or post.published_at is None:
            post.published_at = utc_now()
        post.updated_at = utc_now()

        post = self._commit(post)
        logger.info("Updated post %s", post.id)
        return post

    def delete_post(self, post_id: int) -> bool:
        post = self.session.get(Post, post_id)
        if not post:
            return False
        self.session.delete(post)
        self.session.commit()
        logger.info("Deleted post %s", post_id)
        return True
