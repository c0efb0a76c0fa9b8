"""
Auth Service - registration and login against the users table
"""

from typing import Optional, Tuple
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from faculty_portal.core.exceptions import ConflictError, ValidationError
from faculty_portal.core.logging_config import logger
from faculty_portal.core.security import get_password_hash, verify_password, create_user_token
from faculty_portal.core.storage_errors import commit_or_raise
from faculty_portal.models.academic import Faculty, StudentClass
from faculty_portal.models.user import User, UserRole
from faculty_portal.schemas.auth import UserRegister, UserLogin

INVALID_CREDENTIALS = "Invalid email or password"


class AuthService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def register(self, data: UserRegister, client_ip: str = "unknown") -> Tuple[User, str]:
        """
        Create an account and return it with a fresh access token.

        The faculty must exist, and so must the class when one is given.
        Class representative status only sticks for students with a class.
        """
        if await self.db.get(Faculty, data.faculty_id) is None:
            logger.log_auth_event("register", False, data.email, "unknown faculty", client_ip=client_ip)
            raise ValidationError("Invalid faculty selected", field="faculty_id")

        if data.class_id is not None and await self.db.get(StudentClass, data.class_id) is None:
            logger.log_auth_event("register", False, data.email, "unknown class", client_ip=client_ip)
            raise ValidationError("Invalid class selected", field="class_id")

        if await self.get_by_email(data.email) is not None:
            logger.log_auth_event("register", False, data.email, "email taken", client_ip=client_ip)
            raise ConflictError("User already exists with this email")

        is_student = data.role == UserRole.STUDENT
        user = User(
            email=data.email,
            hashed_password=get_password_hash(data.password),
            name=data.name,
            role=data.role,
            faculty_id=data.faculty_id,
            class_id=data.class_id if is_student else None,
            is_class_rep=bool(data.is_class_rep and is_student and data.class_id is not None),
        )
        self.db.add(user)
        # Unique index on email closes the gap between the check above and here
        await commit_or_raise(self.db, "register")
        await self.db.refresh(user)

        logger.log_auth_event("register", True, user.email, client_ip=client_ip, role=user.role.value)
        return user, create_user_token(user.id)

    async def login(self, data: UserLogin, client_ip: str = "unknown") -> Tuple[User, str]:
        """Same message for unknown email and wrong password"""
        user = await self.get_by_email(data.email)

        if user is None or not verify_password(data.password, user.hashed_password):
            logger.log_auth_event("login", False, data.email, INVALID_CREDENTIALS, client_ip=client_ip)
            raise ValidationError(INVALID_CREDENTIALS)

        logger.log_auth_event("login", True, user.email, client_ip=client_ip)
        return user, create_user_token(user.id)
