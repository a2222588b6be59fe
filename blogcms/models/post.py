from typing import Optional, List
from datetime import datetime
from sqlmodel import Field, SQLModel, Column
from sqlalchemy import JSON, DateTime, Text

from blogcms.core.timeutils import utc_now


class Post(SQLModel, table=True):
    __tablename__ = "posts"

    id: Optional[int] = Field(default=None, primary_key=True)

    # Bilingual content
    title_en: str = Field(index=True)
    title_zh: str = Field(index=True)
    slug_en: str = Field(unique=True, index=True)  # URL-friendly title
    slug_zh: str = Field(unique=True, index=True)
    content_en: str = Field(sa_column=Column(Text, nullable=False))
    content_zh: str = Field(sa_column=Column(Text, nullable=False))
    excerpt_en: Optional[str] = None
    excerpt_zh: Optional[str] = None

    # Categorization. Plain id string, not a foreign key to categories.
    category: str = Field(index=True)
    tags: List[str] = Field(default=[], sa_column=Column(JSON))

    # Status
    featured: bool = Field(default=False)
    published: bool = Field(default=False, index=True)
    published_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))

    # Author
    author_id: Optional[int] = Field(default=None, foreign_key="users.id", index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))


class PostPublic(SQLModel):
    id: int
    title_en: str
    title_zh: str
    slug_en: str
    slug_zh: str
    content_en: str
    content_zh: str
    excerpt_en: Optional[str] = None
    excerpt_zh: Optional[str] = None
    category: str
    tags: List[str] = []
    featured: bool
    published: bool
    author_id: Optional[int] = None
    author_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    published_at: Optional[datetime] = None
