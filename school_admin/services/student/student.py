import logging
from typing import AbstractSet, Any, Mapping

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from school_admin.core.database import storage_errors
from school_admin.core.exceptions import BadRequestException, NotFoundException
from school_admin.models.student import Student
from school_admin.models.teacher import Teacher
from school_admin.schemas.student import StudentCreate, StudentUpdate
from school_admin.services.pagination import PageResult, paginate, parse_list_query, parse_populate

logger = logging.getLogger(__name__)

# populate name -> eager loader
RELATIONS = {
    "courseId": lambda: selectinload(Student.courses),
}


def _ensure_teacher_exists(db: Session, teacher_id: int) -> None:
    with storage_errors(db, "look up teacher"):
        exists = db.get(Teacher, teacher_id) is not None
    if not exists:
        raise BadRequestException(f"Teacher {teacher_id} does not exist")


def get_student(db: Session, student_id: int, populate: AbstractSet[str] = frozenset()) -> Student:
    """Load one student, eager-loading the requested relations."""
    stmt = select(Student).where(Student.id == student_id)
    for name in sorted(populate):
        stmt = stmt.options(RELATIONS[name]())
    with storage_errors(db, "load student"):
        student = db.scalar(stmt)
    if student is None:
        raise NotFoundException("Student not found")
    return student


def get_student_with_params(db: Session, student_id: int, raw_populate: str = None) -> Student:
    return get_student(db, student_id, parse_populate(raw_populate, RELATIONS.keys()))


def list_students(db: Session, raw_params: Mapping[str, Any]) -> PageResult:
    query = parse_list_query(raw_params, RELATIONS.keys())
    return paginate(db, Student, query, RELATIONS)


def create_student(db: Session, student: StudentCreate) -> Student:
    _ensure_teacher_exists(db, student.teacher_id)
    db_student = Student(**student.model_dump())
    with storage_errors(db, "create student"):
        db.add(db_student)
        db.commit()
        db.refresh(db_student)
    logger.info("Created student %s", db_student.id)
    return db_student


def update_student(db: Session, student_id: int, student: StudentUpdate) -> Student:
    """Merge the fields present in the request into the stored student."""
    db_student = get_student(db, student_id)
    changes = student.model_dump(exclude_unset=True)
    if "teacher_id" in changes:
        if changes["teacher_id"] is None:
            raise BadRequestException("teacher_id cannot be null")
        _ensure_teacher_exists(db, changes["teacher_id"])
    if "title" in changes and changes["title"] is None:
        raise BadRequestException("title cannot be null")

    for name, value in changes.items():
        setattr(db_student, name, value)
    with storage_errors(db, "update student"):
        db.commit()
        db.refresh(db_student)
    return db_student


def delete_student(db: Session, student_id: int) -> None:
    db_student = get_student(db, student_id)
    with storage_errors(db, "delete student"):
        db.delete(db_student)
        db.commit()
    logger.info("Deleted student %s", student_id)
