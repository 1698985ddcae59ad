from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class CourseBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    teacher_id: Optional[int] = None


class CourseCreate(CourseBase):
    model_config = ConfigDict(extra="forbid")

    student_ids: Optional[List[int]] = None


class CourseUpdate(BaseModel):
    """Partial update: only the fields sent are applied."""
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    teacher_id: Optional[int] = None
    student_ids: Optional[List[int]] = None


class Course(CourseBase):
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
