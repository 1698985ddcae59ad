from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from school_admin.core.database import storage_errors
from school_admin.models.teacher import Teacher


class TeacherCredentialStore:
    """Lookup and creation of teacher identity records for the auth flow."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_by_identity(self, name: str, department: str, email: str) -> Optional[Teacher]:
        stmt = (
            select(Teacher)
            .where(
                Teacher.name == name,
                Teacher.department == department,
                func.lower(Teacher.email) == email.lower(),
            )
            .limit(1)
        )
        with storage_errors(self.db, "look up teacher identity"):
            return self.db.scalar(stmt)

    def find_by_email(self, email: str) -> Optional[Teacher]:
        # Emails are not unique at the storage level; the oldest account wins
        stmt = (
            select(Teacher)
            .where(func.lower(Teacher.email) == email.lower())
            .order_by(Teacher.id)
            .limit(1)
        )
        with storage_errors(self.db, "look up teacher by email"):
            return self.db.scalar(stmt)

    def create(self, name: str, department: str, email: str, password_hash: str) -> Teacher:
        teacher = Teacher(
            name=name,
            department=department,
            email=email,
            password_hash=password_hash,
        )
        with storage_errors(self.db, "register teacher"):
            self.db.add(teacher)
            self.db.commit()
            self.db.refresh(teacher)
        return teacher
