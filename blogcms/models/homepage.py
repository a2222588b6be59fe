from typing import Any, Callable, Dict, Optional
from datetime import datetime
from pydantic import BaseModel
from sqlmodel import Field, SQLModel, Column
from sqlalchemy import DateTime, Text

from blogcms.core.timeutils import utc_now

HOMEPAGE_ROW_ID = 1
HOMEPAGE_SCHEMA_VERSION = 1


class Homepage(SQLModel, table=True):
    __tablename__ = "homepage"

    # Always HOMEPAGE_ROW_ID; the table holds a single document
    id: int = Field(default=HOMEPAGE_ROW_ID, primary_key=True)
    content: str = Field(sa_column=Column(Text, nullable=False))  # JSON text
    schema_version: int = Field(default=HOMEPAGE_SCHEMA_VERSION)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))


# Editable homepage document. Field names follow the admin console's form keys.

class SiteInfo(BaseModel):
    title: Optional[str] = None
    tagline: Optional[str] = None
    description: Optional[str] = None


class WelcomeSection(BaseModel):
    title: Optional[str] = None
    subtitle: Optional[str] = None
    intro1: Optional[str] = None
    intro2: Optional[str] = None
    currentRole: Optional[str] = None
    currentCompany: Optional[str] = None
    currentDesc: Optional[str] = None
    previousRole: Optional[str] = None
    previousCompany: Optional[str] = None
    previousDesc: Optional[str] = None
    communityTitle: Optional[str] = None
    communityDesc: Optional[str] = None
    techCommunity: Optional[str] = None
    techCommunityDesc: Optional[str] = None
    personalInterests: Optional[str] = None
    personalInterestsDesc: Optional[str] = None


class LocaleContent(BaseModel):
    site: Optional[SiteInfo] = None
    welcome: Optional[WelcomeSection] = None


class HomepageContent(BaseModel):
    version: int = HOMEPAGE_SCHEMA_VERSION
    zh: Optional[LocaleContent] = None
    en: Optional[LocaleContent] = None


def _nest_under_zh(raw: Dict[str, Any]) -> Dict[str, Any]:
    # Version 0 blobs were the flat {site, welcome} payload of the Chinese page
    if "zh" in raw or "en" in raw:
        return raw
    return {"zh": {key: raw[key] for key in ("site", "welcome") if key in raw}}


# from_version -> step producing from_version + 1
HOMEPAGE_MIGRATIONS: Dict[int, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
    0: _nest_under_zh,
}


def migrate_homepage(raw: Dict[str, Any], version: int) -> Dict[str, Any]:
    """Upgrade a stored homepage document to HOMEPAGE_SCHEMA_VERSION."""
    while version < HOMEPAGE_SCHEMA_VERSION:
        raw = HOMEPAGE_MIGRATIONS[version](raw)
        version += 1
    return raw
