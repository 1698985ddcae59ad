import logging
from typing import AbstractSet, Any, Mapping

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from school_admin.core.database import storage_errors
from school_admin.core.exceptions import BadRequestException, NotFoundException
from school_admin.models.teacher import Teacher
from school_admin.schemas.teacher import TeacherCreate, TeacherUpdate
from school_admin.services.pagination import PageResult, paginate, parse_list_query, parse_populate

logger = logging.getLogger(__name__)

RELATIONS = {
    "courseId": lambda: selectinload(Teacher.courses),
}


def get_teacher(db: Session, teacher_id: int, populate: AbstractSet[str] = frozenset()) -> Teacher:
    stmt = select(Teacher).where(Teacher.id == teacher_id)
    for name in sorted(populate):
        stmt = stmt.options(RELATIONS[name]())
    with storage_errors(db, "load teacher"):
        teacher = db.scalar(stmt)
    if teacher is None:
        raise NotFoundException("Teacher not found")
    return teacher


def get_teacher_with_params(db: Session, teacher_id: int, raw_populate: str = None) -> Teacher:
    return get_teacher(db, teacher_id, parse_populate(raw_populate, RELATIONS.keys()))


def list_teachers(db: Session, raw_params: Mapping[str, Any]) -> PageResult:
    query = parse_list_query(raw_params, RELATIONS.keys())
    return paginate(db, Teacher, query, RELATIONS)


def create_teacher(db: Session, teacher: TeacherCreate) -> Teacher:
    """Plain record creation; accounts with a password go through registration."""
    db_teacher = Teacher(**teacher.model_dump())
    with storage_errors(db, "create teacher"):
        db.add(db_teacher)
        db.commit()
        db.refresh(db_teacher)
    logger.info("Created teacher %s", db_teacher.id)
    return db_teacher


def update_teacher(db: Session, teacher_id: int, teacher: TeacherUpdate) -> Teacher:
    db_teacher = get_teacher(db, teacher_id)
    changes = teacher.model_dump(exclude_unset=True)
    for required in ("name", "department"):
        if required in changes and changes[required] is None:
            raise BadRequestException(f"{required} cannot be null")

    for name, value in changes.items():
        setattr(db_teacher, name, value)
    with storage_errors(db, "update teacher"):
        db.commit()
        db.refresh(db_teacher)
    return db_teacher


def delete_teacher(db: Session, teacher_id: int) -> None:
    db_teacher = get_teacher(db, teacher_id)
    with storage_errors(db, "delete teacher"):
        db.delete(db_teacher)
        db.commit()
    logger.info("Deleted teacher %s", teacher_id)
