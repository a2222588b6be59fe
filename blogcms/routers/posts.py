from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field
from sqlmodel import Session

from blogcms.core.rate_limit import rate_limit
from blogcms.db.session import get_session
from blogcms.routers.auth import TokenUser, get_current_user
from blogcms.services.post import DuplicateSlugError, PostFilters, PostService

router = APIRouter(dependencies=[Depends(rate_limit)])


class PostIn(BaseModel):
    title_en: str = Field(min_length=1)
    title_zh: str = Field(min_length=1)
    slug_en: str = Field(min_length=1)
    slug_zh: str = Field(min_length=1)
    content_en: str = Field(min_length=1)
    content_zh: str = Field(min_length=1)
    excerpt_en: Optional[str] = None
    excerpt_zh: Optional[str] = None
    category: str = Field(min_length=1)
    tags: List[str] = []
    featured: bool = False
    published: bool = False


def get_post_service(session: Session = Depends(get_session)) -> PostService:
    return PostService(session)


@router.get("")
def read_posts(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    category: Optional[str] = None,
    published: Optional[bool] = None,
    search: Optional[str] = None,
    service: PostService = Depends(get_post_service),
):
    """List posts, newest first, with optional category/published/search filters."""
    filters = PostFilters(category=category, published=published, search=search)
    posts, total = service.list_posts(filters, page, limit)

    return {
        "posts": posts,
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "pages": (total + limit - 1) // limit,
        },
    }


@router.get("/slug/{slug}")
def read_post_by_slug(slug: str, service: PostService = Depends(get_post_service)):
    post = service.get_post_by_slug(slug)
    if not post:
        raise HTTPException(status_code=404, detail="文章不存在")
    return {"post": post}


@router.get("/{post_id}")
def read_post(post_id: int, service: PostService = Depends(get_post_service)):
    post = service.get_post(post_id)
    if not post:
        raise HTTPException(status_code=404, detail="文章不存在")
    return {"post": post}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_post(
    post_in: PostIn,
    current_user: TokenUser = Depends(get_current_user),
    service: PostService = Depends(get_post_service),
):
    try:
        post = service.create_post(post_in.model_dump(), author_id=current_user.id)
    except DuplicateSlugError:
        raise HTTPException(status_code=400, detail="slug已存在")

    return {"message": "文章创建成功", "postId": post.id}


@router.put("/{post_id}")
def update_post(
    post_id: int,
    post_in: PostIn,
    current_user: TokenUser = Depends(get_current_user),
    service: PostService = Depends(get_post_service),
):
    try:
        post = service.update_post(post_id, post_in.model_dump())
    except DuplicateSlugError:
        raise HTTPException(status_code=400, detail="slug已存在")

    if not post:
        raise HTTPException(status_code=404, detail="文章不存在")
    return {"message": "文章更新成功"}


@router.delete("/{post_id}")
def delete_post(
    post_id: int,
    current_user: TokenUser = Depends(get_current_user),
    service: PostService = Depends(get_post_service),
):
    if not service.delete_post(post_id):
        raise HTTPException(status_code=404, detail="文章不存在")
    return {"message": "文章删除成功"}
