import logging
from typing import Any, List, Mapping

from sqlalchemy import select
from sqlalchemy.orm import Session

from school_admin.core.database import storage_errors
from school_admin.core.exceptions import BadRequestException, NotFoundException
from school_admin.models.course import Course
from school_admin.models.student import Student
from school_admin.models.teacher import Teacher
from school_admin.schemas.course import CourseCreate, CourseUpdate
from school_admin.services.pagination import PageResult, paginate, parse_list_query, parse_populate

logger = logging.getLogger(__name__)

# Courses declare no populatable relations; any populate value is rejected
RELATIONS = {}


def _resolve_students(db: Session, student_ids: List[int]) -> List[Student]:
    wanted = set(student_ids)
    with storage_errors(db, "look up students"):
        students = list(db.scalars(select(Student).where(Student.id.in_(wanted))).all())
    missing = sorted(wanted - {s.id for s in students})
    if missing:
        raise BadRequestException(
            f"Students do not exist: {', '.join(str(i) for i in missing)}",
            details={"missing": missing},
        )
    return students


def _check_teacher(db: Session, teacher_id) -> None:
    if teacher_id is None:
        return
    with storage_errors(db, "look up teacher"):
        exists = db.get(Teacher, teacher_id) is not None
    if not exists:
        raise BadRequestException(f"Teacher {teacher_id} does not exist")


def get_course(db: Session, course_id: int) -> Course:
    with storage_errors(db, "load course"):
        course = db.get(Course, course_id)
    if course is None:
        raise NotFoundException("Course not found")
    return course


def get_course_with_params(db: Session, course_id: int, raw_populate: str = None) -> Course:
    parse_populate(raw_populate, RELATIONS.keys())
    return get_course(db, course_id)


def list_courses(db: Session, raw_params: Mapping[str, Any]) -> PageResult:
    """Page through courses. `populate` accepts no names here, so `courseId` is a 400."""
    query = parse_list_query(raw_params, RELATIONS.keys())
    return paginate(db, Course, query, RELATIONS)


def create_course(db: Session, course: CourseCreate) -> Course:
    _check_teacher(db, course.teacher_id)
    db_course = Course(**course.model_dump(exclude={"student_ids"}))
    if course.student_ids:
        db_course.students = _resolve_students(db, course.student_ids)
    with storage_errors(db, "create course"):
        db.add(db_course)
        db.commit()
        db.refresh(db_course)
    logger.info("Created course %s", db_course.id)
    return db_course


def update_course(db: Session, course_id: int, course: CourseUpdate) -> Course:
    db_course = get_course(db, course_id)
    changes = course.model_dump(exclude_unset=True)
    if "title" in changes and changes["title"] is None:
        raise BadRequestException("title cannot be null")
    if "teacher_id" in changes:
        _check_teacher(db, changes["teacher_id"])

    student_ids = changes.pop("student_ids", None)
    if student_ids is not None:
        db_course.students = _resolve_students(db, student_ids)
    for name, value in changes.items():
        setattr(db_course, name, value)
    with storage_errors(db, "update course"):
        db.commit()
        db.refresh(db_course)
    return db_course


def delete_course(db: Session, course_id: int) -> None:
    db_course = get_course(db, course_id)
    with storage_errors(db, "delete course"):
        db.delete(db_course)
        db.commit()
    logger.info("Deleted course %s", course_id)
