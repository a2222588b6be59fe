from typing import Optional
from datetime import datetime
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from blogcms.core.timeutils import utc_now


class Category(SQLModel, table=True):
    __tablename__ = "categories"

    id: str = Field(primary_key=True)  # e.g. "technology"
    name_en: str
    name_zh: str
    description_en: Optional[str] = None
    description_zh: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
