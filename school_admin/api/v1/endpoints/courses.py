from typing import Dict, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from school_admin.api.deps import get_db, list_query_params
from school_admin.schemas.common import MessageResponse, Page, PaginationMeta, orm_to_schema
from school_admin.schemas.course import Course, CourseCreate, CourseUpdate
from school_admin.services.course import course as crud_course

router = APIRouter()


@router.get("", response_model=Page[Course], response_model_exclude_unset=True)
def get_courses(
    params: Dict[str, Optional[str]] = Depends(list_query_params),
    db: Session = Depends(get_db)
):
    """
    List courses, oldest first by default

    - **page** / **limit**: pagination (defaults 1 / 10)
    - **sort**: `asc` or `desc` on creation time
    - **populate**: courses have no relations to include; any value is rejected
    """
    result = crud_course.list_courses(db, params)
    return Page[Course](
        data=[orm_to_schema(s, Course) for s in result.items],
        meta=PaginationMeta(total=result.total, page=result.page, limit=result.limit, total_pages=result.total_pages),
    )


@router.get("/{course_id}", response_model=Course, response_model_exclude_unset=True)
def get_course(
    course_id: int,
    populate: Optional[str] = Query(None, description="Not supported for courses; any value is rejected"),
    db: Session = Depends(get_db)
):
    """
    Get one course by ID
    """
    course = crud_course.get_course_with_params(db, course_id, populate)
    return orm_to_schema(course, Course)


@router.post("", response_model=Course, status_code=status.HTTP_201_CREATED, response_model_exclude_unset=True)
def create_course(
    course: CourseCreate,
    db: Session = Depends(get_db)
):
    """
    Create a course

    Required:
    - **title**

    Optional **teacher_id** and **student_ids** must reference existing records.
    """
    return orm_to_schema(crud_course.create_course(db=db, course=course), Course)


@router.put("/{course_id}", response_model=Course, response_model_exclude_unset=True)
def update_course(
    course_id: int,
    course: CourseUpdate,
    db: Session = Depends(get_db)
):
    """
    Update a course (only the fields sent are changed)
    """
    updated_course = crud_course.update_course(db=db, course_id=course_id, course=course)
    return orm_to_schema(updated_course, Course)


@router.delete("/{course_id}", response_model=MessageResponse)
def delete_course(
    course_id: int,
    db: Session = Depends(get_db)
):
    """
    Delete a course
    """
    crud_course.delete_course(db=db, course_id=course_id)
    return MessageResponse(message="Deleted")
