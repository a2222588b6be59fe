import logging
import os
import random
import re
import time
from typing import List, Optional, Tuple
from sqlalchemy import desc, func
from sqlmodel import Session, select

from blogcms.models.media import Media

logger = logging.getLogger(__name__)

# Checked against both the file extension and the MIME type
ALLOWED_IMAGE_TYPES = re.compile(r"jpeg|jpg|png|gif|webp|svg")


class InvalidFileTypeError(Exception):
    pass


class FileTooLargeError(Exception):
    pass


def is_allowed_image(filename: str, content_type: Optional[str]) -> bool:
    extension = os.path.splitext(filename or "")[1].lower()
    return bool(ALLOWED_IMAGE_TYPES.search(extension)) and bool(ALLOWED_IMAGE_TYPES.search(content_type or ""))


def generate_filename(original_name: str, field_name: str = "file") -> str:
    extension = os.path.splitext(original_name)[1]
    unique_suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
    return f"{field_name}-{unique_suffix}{extension}"


class MediaService:
    def __init__(self, session: Session, upload_dir: str, max_size: int):
        self.session = session
        self.upload_dir = upload_dir
        self.max_size = max_size

    def save_upload(
        self,
        file_content: bytes,
        original_name: str,
        content_type: Optional[str],
        alt_text: Optional[str] = None,
    ) -> Media:
        """
        Validate an uploaded image, write it under the upload directory and
        record its metadata.

        Nothing is written to disk unless both the type and the size checks pass.
        """
        if not is_allowed_image(original_name, content_type):
            logger.info("Rejected upload '%s' (%s): not an image", original_name, content_type)
            raise InvalidFileTypeError(original_name)

        if len(file_content) > self.max_size:
            logger.info("Rejected upload '%s': larger than %d bytes", original_name, self.max_size)
            raise FileTooLargeError(original_name)

        filename = generate_filename(original_name)
        os.makedirs(self.upload_dir, exist_ok=True)
        with open(os.path.join(self.upload_dir, filename), "wb") as f:
            f.write(file_content)

        media = Media(
            filename=filename,
            original_name=original_name,
            mime_type=content_type,
            size=len(file_content),
            path=f"/uploads/{filename}",
            alt_text=alt_text or "",
        )
        self.session.add(media)
        self.session.commit()
        self.session.refresh(media)

        logger.info("Stored upload %s as %s (%d bytes)", original_name, filename, media.size)
        return media

    def list_media(self, page: int, limit: int) -> Tuple[List[Media], int]:
        total = self.session.exec(select(func.count(Media.id))).one()
        media = self.session.exec(
            select(Media)
            .order_by(desc(Media.created_at), desc(Media.id))
            .offset((page - 1) * limit)
            .limit(limit)
        ).all()
        return media, total
