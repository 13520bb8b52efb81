"""
RecipeBox User Service
Profile lookup, editing, deletion and profile pictures
"""

from typing import Tuple
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from core.config import Settings
from core.exceptions import InternalError, NotFoundError, ValidationError
from models.users import User
from schemas.user_schemas import UserUpdate
from services.auth_service import AuthService
from services.storage_service import StorageClient, StorageError
from utils.uploads import ImageUpload

logger = structlog.get_logger()


async def get_user(db: AsyncSession, user_id: str) -> User:
    user = await db.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


async def update_profile(
    db: AsyncSession,
    auth_service: AuthService,
    user_id: str,
    user_update: UserUpdate,
) -> User:
    """Apply the supplied fields to the user's profile"""
    updates = {}
    if user_update.profile_pic:
        updates["profile_pic"] = user_update.profile_pic
    if user_update.username:
        updates["username"] = user_update.username
    if user_update.password:
        auth_service.validate_password(user_update.password)
        updates["password_hash"] = auth_service.get_password_hash(user_update.password)

    if not updates:
        raise ValidationError("No fields provided for update")

    user = await get_user(db, user_id)

    if "username" in updates and updates["username"] != user.username:
        taken = await db.execute(
            select(User.id).where(User.username == updates["username"], User.id != user.id)
        )
        if taken.first():
            raise ValidationError("Username already taken")

    for field, value in updates.items():
        setattr(user, field, value)

    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ValidationError("Username already taken")

    logger.info("Profile updated", user_id=user.id, fields=sorted(updates))
    return user


async def delete_user(db: AsyncSession, user_id: str) -> None:
    """Delete the account; persistence failures surface as InternalError"""
    user = await get_user(db, user_id)
    try:
        await db.delete(user)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Failed to delete user", user_id=user_id, error=str(e))
        raise InternalError("Failed to delete user")

    logger.info("User deleted", user_id=user_id)


async def upload_profile_picture(
    db: AsyncSession,
    storage: StorageClient,
    settings: Settings,
    user_id: str,
    image: ImageUpload,
) -> Tuple[User, str]:
    """Store a new profile picture and point the user's profile at it"""
    user = await get_user(db, user_id)

    file_path = f"{user_id}/{uuid.uuid4().hex}{image.extension}"
    try:
        url = await storage.upload(settings.PROFILE_BUCKET, file_path, image.content, image.content_type)
    except StorageError:
        raise InternalError("Upload failed")

    user.profile_pic = url
    await db.commit()

    logger.info("Profile picture updated", user_id=user_id, path=file_path)
    return user, url
