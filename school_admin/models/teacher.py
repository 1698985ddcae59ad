from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from school_admin.core.database import Base
from school_admin.models.mixins import TimestampMixin


class Teacher(TimestampMixin, Base):
    __tablename__ = "teachers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    department = Column(String(255), nullable=False)
    # Intended unique, not enforced: registration checks (name, department, email)
    email = Column(String(255), index=True, nullable=True)
    password_hash = Column(String(255), nullable=True)

    students = relationship("Student", back_populates="teacher", cascade="all, delete-orphan", passive_deletes=True)
    courses = relationship("Course", back_populates="teacher", passive_deletes=True)
