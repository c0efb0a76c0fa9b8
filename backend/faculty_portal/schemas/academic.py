from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Optional

from faculty_portal.models.user import UserRole


class FacultyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class CourseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    code: str
    faculty_id: int
    faculty_name: Optional[str] = None


class ClassCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    course_id: int
    total_students: int = Field(..., ge=0)


class ClassResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    course_id: int
    total_students: int
    course_name: Optional[str] = None
    course_code: Optional[str] = None


class ClassCreatedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    student_class: ClassResponse = Field(..., serialization_alias="class")


class StaffMember(BaseModel):
    id: int
    name: str
    email: str


class ProfileResponse(BaseModel):
    id: int
    email: str
    name: str
    role: UserRole
    faculty_id: int
    is_class_rep: bool
    class_id: Optional[int] = None
    profile_image: Optional[str] = None
    faculty_name: Optional[str] = None
    class_name: Optional[str] = None


class ProfileUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr


class ProfileSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: UserRole


class ProfileUpdateResponse(BaseModel):
    message: str
    user: ProfileSummary


class ProfileImageResponse(BaseModel):
    message: str
    imagePath: str


class MyProfileImageResponse(BaseModel):
    profile_image: Optional[str] = None
