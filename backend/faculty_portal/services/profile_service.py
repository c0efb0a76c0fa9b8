"""
Profile Service - the caller's own account: details, edits and profile image.

Images are written under UPLOAD_DIR/profiles as user-{id}{ext}; the
application mounts UPLOAD_DIR at /uploads so the stored path is directly
fetchable by the frontend.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import aiofiles
import aiofiles.os
from fastapi import UploadFile
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from faculty_portal.core.config import settings
from faculty_portal.core.exceptions import (
    ConflictError,
    FileTooLargeError,
    InvalidFileTypeError,
    UserNotFoundError,
    ValidationError,
)
from faculty_portal.core.logging_config import logger
from faculty_portal.core.storage_errors import commit_or_raise
from faculty_portal.models.academic import Faculty, StudentClass
from faculty_portal.models.user import User
from faculty_portal.schemas.academic import ProfileUpdate

PROFILE_SUBDIR = "profiles"
PUBLIC_PREFIX = "/uploads"
CHUNK_SIZE = 64 * 1024


class ProfileService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_profile(self, user_id: int) -> Dict[str, Any]:
        stmt = (
            select(
                User.id,
                User.email,
                User.name,
                User.role,
                User.faculty_id,
                User.is_class_rep,
                User.class_id,
                User.profile_image,
                Faculty.name.label("faculty_name"),
                StudentClass.name.label("class_name"),
            )
            .outerjoin(Faculty, User.faculty_id == Faculty.id)
            .outerjoin(StudentClass, User.class_id == StudentClass.id)
            .where(User.id == user_id)
        )
        row = (await self.db.execute(stmt)).mappings().first()
        if row is None:
            raise UserNotFoundError(user_id)
        return dict(row)

    async def update_profile(self, user: User, data: ProfileUpdate) -> User:
        if data.email != user.email:
            taken = await self.db.execute(
                select(User.id).where(User.email == data.email, User.id != user.id)
            )
            if taken.first() is not None:
                raise ConflictError("User with this email already exists")

        user.name = data.name
        user.email = data.email
        await commit_or_raise(self.db, "update_profile")
        await self.db.refresh(user)

        logger.log_domain_event("User", "profile updated", user.id)
        return user

    async def save_profile_image(self, user: User, upload: Optional[UploadFile]) -> str:
        """
        Store an uploaded image and point the user's profile at it.

        Rejects non-image MIME types and anything above
        MAX_PROFILE_IMAGE_SIZE. A rejected upload leaves the previous image in place.
        """
        if upload is None or not upload.filename:
            raise ValidationError("No file uploaded", field="profile_image")

        content_type = upload.content_type or ""
        if not any(content_type.startswith(prefix) for prefix in settings.ALLOWED_IMAGE_MIME_PREFIXES):
            raise InvalidFileTypeError(content_type)

        target_dir = Path(settings.UPLOAD_DIR) / PROFILE_SUBDIR
        await aiofiles.os.makedirs(target_dir, exist_ok=True)

        filename = f"user-{user.id}{Path(upload.filename).suffix.lower()}"
        target = target_dir / filename
        # Moved over target only after the size check passes
        staging = target_dir / f"user-{user.id}.upload"

        written = 0
        try:
            async with aiofiles.open(staging, "wb") as out:
                while True:
                    chunk = await upload.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > settings.MAX_PROFILE_IMAGE_SIZE:
                        raise FileTooLargeError(settings.MAX_PROFILE_IMAGE_SIZE)
                    await out.write(chunk)
        except Exception:
            if await aiofiles.os.path.exists(staging):
                await aiofiles.os.remove(staging)
            raise
        await aiofiles.os.replace(staging, target)

        image_path = f"{PUBLIC_PREFIX}/{PROFILE_SUBDIR}/{filename}"
        user.profile_image = image_path
        await commit_or_raise(self.db, "save_profile_image")

        logger.log_domain_event("User", "profile image uploaded", user.id, bytes=written)
        return image_path
