from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Optional

from faculty_portal.models.user import UserRole


class UserRegister(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    name: str = Field(..., min_length=1, max_length=255)
    role: UserRole
    faculty_id: int

    # Students only
    is_class_rep: bool = False
    class_id: Optional[int] = None


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserPublic(BaseModel):
    """User as returned to clients; never carries the password hash"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    role: UserRole
    faculty_id: int
    is_class_rep: bool
    class_id: Optional[int] = None


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserPublic
