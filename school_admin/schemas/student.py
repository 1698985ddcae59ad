from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from school_admin.schemas.course import Course


class StudentBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    teacher_id: int


class StudentCreate(StudentBase):
    model_config = ConfigDict(extra="forbid")


class StudentUpdate(BaseModel):
    """Partial update: only the fields sent are applied."""
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    teacher_id: Optional[int] = None


class StudentInDB(StudentBase):
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class Student(StudentInDB):
    # Present only when requested with ?populate=courseId
    courses: Optional[List[Course]] = None
