from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from school_admin.schemas.course import Course


class TeacherBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    department: str = Field(..., min_length=1, max_length=255)
    email: Optional[EmailStr] = None


class TeacherCreate(TeacherBase):
    model_config = ConfigDict(extra="forbid")


class TeacherUpdate(BaseModel):
    """Partial update. Passwords only change through registration."""
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    department: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None


class TeacherInDB(TeacherBase):
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class Teacher(TeacherInDB):
    # Present only when requested with ?populate=courseId
    courses: Optional[List[Course]] = None
