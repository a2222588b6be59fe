from typing import Optional
from datetime import datetime
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from blogcms.core.timeutils import utc_now


class Media(SQLModel, table=True):
    __tablename__ = "media"

    id: Optional[int] = Field(default=None, primary_key=True)
    filename: str  # Name on disk
    original_name: str
    mime_type: str
    size: int
    path: str  # Public URL path, e.g. /uploads/file-123.png
    alt_text: Optional[str] = ""
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), index=True)
