from typing import Dict, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from school_admin.api.deps import get_db, list_query_params
from school_admin.schemas.common import MessageResponse, Page, PaginationMeta, orm_to_schema
from school_admin.schemas.student import Student, StudentCreate, StudentUpdate
from school_admin.services.student import student as crud_student

router = APIRouter()


@router.get("", response_model=Page[Student], response_model_exclude_unset=True)
def get_students(
    params: Dict[str, Optional[str]] = Depends(list_query_params),
    db: Session = Depends(get_db)
):
    """
    List students, oldest first by default

    - **page** / **limit**: pagination (defaults 1 / 10)
    - **sort**: `asc` or `desc` on creation time
    - **populate**: `courseId` to include each student's courses
    """
    result = crud_student.list_students(db, params)
    return Page[Student](
        data=[orm_to_schema(s, Student) for s in result.items],
        meta=PaginationMeta(total=result.total, page=result.page, limit=result.limit, total_pages=result.total_pages),
    )


@router.get("/{student_id}", response_model=Student, response_model_exclude_unset=True)
def get_student(
    student_id: int,
    populate: Optional[str] = Query(None, description="Relations to include, e.g. courseId"),
    db: Session = Depends(get_db)
):
    """
    Get one student by ID
    """
    student = crud_student.get_student_with_params(db, student_id, populate)
    return orm_to_schema(student, Student)


@router.post("", response_model=Student, status_code=status.HTTP_201_CREATED, response_model_exclude_unset=True)
def create_student(
    student: StudentCreate,
    db: Session = Depends(get_db)
):
    """
    Create a student

    Required:
    - **title**
    - **teacher_id**: owning teacher, must exist
    """
    return orm_to_schema(crud_student.create_student(db=db, student=student), Student)


@router.put("/{student_id}", response_model=Student, response_model_exclude_unset=True)
def update_student(
    student_id: int,
    student: StudentUpdate,
    db: Session = Depends(get_db)
):
    """
    Update a student (only the fields sent are changed)
    """
    updated_student = crud_student.update_student(db=db, student_id=student_id, student=student)
    return orm_to_schema(updated_student, Student)


@router.delete("/{student_id}", response_model=MessageResponse)
def delete_student(
    student_id: int,
    db: Session = Depends(get_db)
):
    """
    Delete a student
    """
    crud_student.delete_student(db=db, student_id=student_id)
    return MessageResponse(message="Deleted")
