from typing import Optional
from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from sqlmodel import Session

from blogcms.core.config import Settings, get_settings
from blogcms.core.rate_limit import rate_limit
from blogcms.db.session import get_session
from blogcms.routers.auth import TokenUser, get_current_user
from blogcms.services.media import FileTooLargeError, InvalidFileTypeError, MediaService

router = APIRouter()


def get_media_service(
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> MediaService:
    return MediaService(session, upload_dir=settings.UPLOAD_DIR, max_size=settings.MAX_UPLOAD_SIZE)


@router.post("/upload", status_code=status.HTTP_201_CREATED)
async def upload_media(
    file: Optional[UploadFile] = File(None),
    alt_text: Optional[str] = Form(None),
    current_user: TokenUser = Depends(get_current_user),
    service: MediaService = Depends(get_media_service),
):
    """
    Upload a single image to local storage.
    Returns the stored media record.
    """
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="没有上传文件")

    # Read one byte past the ceiling so oversize files are detected without
    # buffering the whole body.
    content = await file.read(service.max_size + 1)

    try:
        media = service.save_upload(content, file.filename, file.content_type, alt_text)
    except InvalidFileTypeError:
        raise HTTPException(status_code=400, detail="只允许上传图片文件")
    except FileTooLargeError:
        limit_mb = service.max_size // (1024 * 1024)
        raise HTTPException(status_code=400, detail=f"文件大小超过限制（{limit_mb}MB）")

    return {"message": "文件上传成功", "media": media}


@router.get("", dependencies=[Depends(rate_limit)])
def read_media(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    current_user: TokenUser = Depends(get_current_user),
    service: MediaService = Depends(get_media_service),
):
    media, total = service.list_media(page, limit)
    return {
        "media": media,
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "pages": (total + limit - 1) // limit,
        },
    }
