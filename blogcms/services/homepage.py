import json
import logging
from typing import Any, Dict, Optional
from sqlmodel import Session

from blogcms.core.timeutils import utc_now

from blogcms.models.homepage import (
    HOMEPAGE_ROW_ID,
    HOMEPAGE_SCHEMA_VERSION,
    Homepage,
    HomepageContent,
    migrate_homepage,
)

logger = logging.getLogger(__name__)


class HomepageDecodeError(Exception):
    pass


class I18nFileError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class HomepageService:
    def __init__(self, session: Session):
        self.session = session

    def get_content(self) -> Optional[HomepageContent]:
        """Return the stored homepage document, or None if nothing was saved yet."""
        row = self.session.get(Homepage, HOMEPAGE_ROW_ID)
        if not row:
            return None

        try:
            raw = json.loads(row.content)
            if not isinstance(raw, dict):
                raise ValueError("homepage content is not a JSON object")
            raw = migrate_homepage(raw, row.schema_version or 0)
            return HomepageContent.model_validate(raw)
        except ValueError as e:
            # json.JSONDecodeError and pydantic.ValidationError are ValueErrors
            logger.error("Stored homepage content is unreadable: %s", e)
            raise HomepageDecodeError(str(e)) from e

    def save_content(self, content: HomepageContent) -> Homepage:
        """Overwrite the homepage document. The last write wins."""
        row = self.session.get(Homepage, HOMEPAGE_ROW_ID) or Homepage(id=HOMEPAGE_ROW_ID)
        content = content.model_copy(update={"version": HOMEPAGE_SCHEMA_VERSION})
        row.content = content.model_dump_json(exclude_none=True)
        row.schema_version = HOMEPAGE_SCHEMA_VERSION
        row.updated_at = utc_now()

        self.session.add(row)
        self.session.commit()
        self.session.refresh(row)
        logger.info("Homepage content saved")
        return row


def update_i18n_file(
    path: str,
    site: Optional[Dict[str, Any]] = None,
    welcome: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Merge homepage text into the static i18n.json served to the public site.

    `site` and `welcome` are shallow-merged into the Chinese section; only the
    site title is copied to the English section.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            i18n_data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error("Cannot read i18n file %s: %s", path, e)
        raise I18nFileError("无法读取国际化文件") from e

    zh = i18n_data.setdefault("zh", {})
    if site:
        zh["site"] = {**zh.get("site", {}), **site}
    if welcome:
        zh["welcome"] = {**zh.get("welcome", {}), **welcome}

    if site and site.get("title"):
        i18n_data.setdefault("en", {}).setdefault("site", {})["title"] = site["title"]

    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(i18n_data, f, ensure_ascii=False, indent=2)
    except OSError as e:
        logger.error("Cannot write i18n file %s: %s", path, e)
        raise I18nFileError("保存文件失败") from e

    logger.info("Updated i18n file %s", path)
    return i18n_data
