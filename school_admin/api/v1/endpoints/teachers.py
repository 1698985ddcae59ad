from typing import Dict, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from school_admin.api.deps import get_db, list_query_params
from school_admin.schemas.common import MessageResponse, Page, PaginationMeta, orm_to_schema
from school_admin.schemas.teacher import Teacher, TeacherCreate, TeacherUpdate
from school_admin.services.teacher import teacher as crud_teacher

router = APIRouter()


@router.get("", response_model=Page[Teacher], response_model_exclude_unset=True)
def get_teachers(
    params: Dict[str, Optional[str]] = Depends(list_query_params),
    db: Session = Depends(get_db)
):
    """
    List teachers, oldest first by default

    - **page** / **limit**: pagination (defaults 1 / 10)
    - **sort**: `asc` or `desc` on creation time
    - **populate**: `courseId` to include each teacher's courses
    """
    result = crud_teacher.list_teachers(db, params)
    return Page[Teacher](
        data=[orm_to_schema(s, Teacher) for s in result.items],
        meta=PaginationMeta(total=result.total, page=result.page, limit=result.limit, total_pages=result.total_pages),
    )


@router.get("/{teacher_id}", response_model=Teacher, response_model_exclude_unset=True)
def get_teacher(
    teacher_id: int,
    populate: Optional[str] = Query(None, description="Relations to include, e.g. courseId"),
    db: Session = Depends(get_db)
):
    """
    Get one teacher by ID
    """
    teacher = crud_teacher.get_teacher_with_params(db, teacher_id, populate)
    return orm_to_schema(teacher, Teacher)


@router.post("", response_model=Teacher, status_code=status.HTTP_201_CREATED, response_model_exclude_unset=True)
def create_teacher(
    teacher: TeacherCreate,
    db: Session = Depends(get_db)
):
    """
    Create a teacher

    Required:
    - **name**
    - **department**

    Login-capable accounts are created with /teachers/register instead.
    """
    return orm_to_schema(crud_teacher.create_teacher(db=db, teacher=teacher), Teacher)


@router.put("/{teacher_id}", response_model=Teacher, response_model_exclude_unset=True)
def update_teacher(
    teacher_id: int,
    teacher: TeacherUpdate,
    db: Session = Depends(get_db)
):
    """
    Update a teacher (only the fields sent are changed)
    """
    updated_teacher = crud_teacher.update_teacher(db=db, teacher_id=teacher_id, teacher=teacher)
    return orm_to_schema(updated_teacher, Teacher)


@router.delete("/{teacher_id}", response_model=MessageResponse)
def delete_teacher(
    teacher_id: int,
    db: Session = Depends(get_db)
):
    """
    Delete a teacher
    """
    crud_teacher.delete_teacher(db=db, teacher_id=teacher_id)
    return MessageResponse(message="Deleted")
