import logging
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from school_admin.api.deps import get_password_hasher
from school_admin.core.database import SessionLocal, create_database_tables
from school_admin.models.course import Course
from school_admin.models.student import Student
from school_admin.models.teacher import Teacher

# Setup logging to see output
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEMO_PASSWORD = "change-me"


def seed_data():
    """
    Seed a demo teacher (able to log in), a few students and courses.
    """
    create_database_tables()
    db = SessionLocal()
    try:
        # Skip if data already exists to avoid duplicates
        if db.scalar(select(Teacher).limit(1)) is not None:
            logger.info("Database already contains data. Skipping seed.")
            return

        logger.info("Seeding data...")
        hasher = get_password_hasher()

        teacher = Teacher(
            name="Ada Lovelace",
            department="Mathematics",
            email="ada@example.com",
            password_hash=hasher.hash(DEMO_PASSWORD),
        )
        algebra = Course(title="Algebra I", description="Linear equations and functions", teacher=teacher)
        geometry = Course(title="Geometry", description="Euclidean geometry", teacher=teacher)

        students = [
            Student(title="Nguyen Van A", description="Grade 10", teacher=teacher, courses=[algebra]),
            Student(title="Tran Thi B", description="Grade 11", teacher=teacher, courses=[algebra, geometry]),
            Student(title="Le Van C", description="Grade 12", teacher=teacher, courses=[geometry]),
        ]

        db.add(teacher)
        db.add_all(students)
        db.commit()

        logger.info("Data seeded. Log in as %s with the demo password.", teacher.email)

    except SQLAlchemyError as e:
        logger.error(f"Error seeding data: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_data()
