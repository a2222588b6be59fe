from typing import Any, Dict, Optional
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlmodel import Session

from blogcms.core.config import Settings, get_settings
from blogcms.core.rate_limit import rate_limit
from blogcms.db.session import get_session
from blogcms.models.homepage import HomepageContent
from blogcms.routers.auth import TokenUser, get_current_user
from blogcms.services.homepage import (
    HomepageDecodeError,
    HomepageService,
    I18nFileError,
    update_i18n_file,
)

router = APIRouter(dependencies=[Depends(rate_limit)])


class I18nUpdate(BaseModel):
    site: Optional[Dict[str, Any]] = None
    welcome: Optional[Dict[str, Any]] = None


def get_homepage_service(session: Session = Depends(get_session)) -> HomepageService:
    return HomepageService(session)


@router.get("")
def get_homepage(service: HomepageService = Depends(get_homepage_service)):
    """Get the editable homepage text. Empty content when nothing was saved yet."""
    try:
        content = service.get_content()
    except HomepageDecodeError:
        return {"success": False, "message": "数据解析错误"}

    if content is None:
        return {"success": True, "content": {}}
    return {"success": True, "content": content.model_dump(exclude_none=True)}


@router.post("")
def save_homepage(
    content: HomepageContent,
    current_user: TokenUser = Depends(get_current_user),
    service: HomepageService = Depends(get_homepage_service),
):
    """Replace the homepage content. Concurrent editors overwrite each other."""
    service.save_content(content)
    return {"success": True, "message": "主页内容保存成功"}


@router.post("/update")
def update_homepage_i18n(
    data: I18nUpdate,
    current_user: TokenUser = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
):
    """Legacy endpoint: write homepage text straight into the static i18n.json."""
    try:
        update_i18n_file(settings.I18N_PATH, site=data.site, welcome=data.welcome)
    except I18nFileError as e:
        raise HTTPException(status_code=500, detail=e.message)
    return {"message": "主页内容更新成功"}
