"""
RecipeBox User Management Endpoints
Profile read, update, deletion and profile pictures
"""

from typing import Optional

from fastapi import APIRouter, File, Response, UploadFile

from core.dependencies import AppSettings, Auth, CurrentUserId, DBSession, Storage
from schemas.auth_schemas import User
from schemas.base import MessageResponse
from schemas.user_schemas import ProfilePictureResponse, ProfileUpdateResponse, UserUpdate
from services import user_service
from utils.uploads import read_image_upload

router = APIRouter()


@router.get("/", response_model=User)
async def my_profile(user_id: CurrentUserId, db: DBSession):
    """Get the signed-in user's profile"""
    user = await user_service.get_user(db, user_id)
    return User.model_validate(user)


@router.put("/editprofile", response_model=ProfileUpdateResponse)
async def edit_profile(user_update: UserUpdate, user_id: CurrentUserId, db: DBSession, auth_service: Auth):
    """Update username, password and/or profile picture URL"""
    user = await user_service.update_profile(db, auth_service, user_id, user_update)
    return ProfileUpdateResponse(message="Profile updated successfully", user=User.model_validate(user))


@router.delete("/", response_model=MessageResponse)
async def delete_profile(response: Response, user_id: CurrentUserId, db: DBSession, settings: AppSettings):
    """Delete the signed-in user's account and end the session"""
    await user_service.delete_user(db, user_id)
    response.delete_cookie(settings.COOKIE_NAME, httponly=True, secure=settings.COOKIE_SECURE, samesite="lax")
    return MessageResponse(message="User deleted successfully")


@router.post("/upload-profile-picture", response_model=ProfilePictureResponse)
async def upload_profile_picture(
    user_id: CurrentUserId,
    db: DBSession,
    storage: Storage,
    settings: AppSettings,
    profile_pic: Optional[UploadFile] = File(None, alias="profilePic"),
):
    """Upload a new profile picture"""
    image = await read_image_upload(profile_pic, settings)
    user, url = await user_service.upload_profile_picture(db, storage, settings, user_id, image)
    return ProfilePictureResponse(
        message="Profile picture updated successfully",
        user=User.model_validate(user),
        url=url,
    )
