"""
RecipeBox Authentication Endpoints
Signup, signin and logout with a cookie-held session token
"""

from fastapi import APIRouter, Response, status

from core.dependencies import AppSettings, Auth, DBSession
from schemas.auth_schemas import SignupResponse, User, UserCreate, UserLogin
from schemas.base import MessageResponse

router = APIRouter()


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
async def signup(user_data: UserCreate, db: DBSession, auth_service: Auth):
    """Register a new user account"""
    user = await auth_service.register_user(user_data, db)
    return SignupResponse(message="User created successfully", user_id=user.id)


@router.post("/signin", response_model=User)
async def signin(login_data: UserLogin, response: Response, db: DBSession, auth_service: Auth, settings: AppSettings):
    """
    Authenticate user and start a session

    The session token is only ever delivered as an httpOnly cookie.
    """
    user, token = await auth_service.authenticate_user(login_data, db)

    response.set_cookie(
        key=settings.COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
        max_age=settings.JWT_EXPIRE_MINUTES * 60,
    )
    return User.model_validate(user)


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response, settings: AppSettings):
    """Clear the session cookie"""
    response.delete_cookie(settings.COOKIE_NAME, httponly=True, secure=settings.COOKIE_SECURE, samesite="lax")
    return MessageResponse(message="Logged out successfully")
