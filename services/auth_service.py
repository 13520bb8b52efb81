"""
RecipeBox Authentication Service
Password hashing, session tokens, signup and signin
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any, Tuple
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from core.config import Settings
from core.exceptions import NotFoundError, UnauthorizedError, ValidationError
from models.users import User
from schemas.auth_schemas import UserCreate, UserLogin

logger = structlog.get_logger()


class AuthService:
    def __init__(self, settings: Settings):
        self.settings = settings
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=settings.PASSWORD_HASH_ROUNDS,
        )

        # JWT settings
        self.secret_key = settings.JWT_SECRET_KEY
        self.algorithm = settings.JWT_ALGORITHM
        self.token_expire_minutes = settings.JWT_EXPIRE_MINUTES

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash"""
        return self.pwd_context.verify(plain_password, hashed_password)

    def get_password_hash(self, password: str) -> str:
        """Hash a password"""
        return self.pwd_context.hash(password)

    def validate_password(self, password: str) -> None:
        if len(password) < self.settings.MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {self.settings.MIN_PASSWORD_LENGTH} characters"
            )

    def create_access_token(
        self,
        data: Dict[str, Any],
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """Create JWT session token"""
        to_encode = data.copy()
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(minutes=self.token_expire_minutes))

        to_encode.update({
            "exp": expire,
            "iat": now,
        })

        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> str:
        """Verify a session token and return the user id it was issued for"""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            logger.info("Rejected session token", reason=str(e))
            raise UnauthorizedError("Invalid token")

        user_id = payload.get("sub")
        if not user_id:
            raise UnauthorizedError("Invalid token")
        return user_id

    async def register_user(self, user_data: UserCreate, db: AsyncSession) -> User:
        """Create a new account"""
        if not user_data.username or not user_data.email or not user_data.password:
            raise ValidationError("All fields are required")

        self.validate_password(user_data.password)

        email = user_data.email.lower()
        existing = await db.execute(
            select(User.email, User.username).where(
                (User.email == email) | (User.username == user_data.username)
            )
        )
        rows = existing.all()
        if any(row.email == email for row in rows):
            raise ValidationError("Email already in use")
        if rows:
            raise ValidationError("Username already taken")

        user = User(
            username=user_data.username,
            email=email,
            password_hash=self.get_password_hash(user_data.password),
            saved_recipes=[],
        )
        db.add(user)
        try:
            await db.commit()
        except IntegrityError:
            # Lost a race against a concurrent signup with the same email or username
            await db.rollback()
            raise ValidationError("Email or username already in use")

        logger.info("User registered", user_id=user.id)
        return user

    async def authenticate_user(self, login_data: UserLogin, db: AsyncSession) -> Tuple[User, str]:
        """Check credentials and issue a session token"""
        if not login_data.email or not login_data.password:
            raise ValidationError("All fields are required")

        result = await db.execute(select(User).where(User.email == login_data.email.lower()))
        user = result.scalar_one_or_none()
        if not user:
            raise NotFoundError("User not found")

        if not self.verify_password(login_data.password, user.password_hash):
            logger.warning("Login failed", user_id=user.id, reason="invalid_password")
            raise ValidationError("Invalid password")

        token = self.create_access_token(data={"sub": user.id})
        logger.info("User signed in", user_id=user.id)
        return user, token
