from fastapi import APIRouter, Depends
from school_admin.api.deps import require_teacher
from school_admin.api.v1.endpoints import auth
from school_admin.api.v1.endpoints import courses
from school_admin.api.v1.endpoints import students
from school_admin.api.v1.endpoints import teachers

api_router = APIRouter()

# Public: registration and login. Must come before the /teachers/{id} routes.
api_router.include_router(
    auth.router,
    prefix="/teachers",
    tags=["auth"]
)

# Every resource group requires a valid bearer token
protected = [Depends(require_teacher)]

api_router.include_router(
    teachers.router,
    prefix="/teachers",
    tags=["teachers"],
    dependencies=protected
)

api_router.include_router(
    students.router,
    prefix="/students",
    tags=["students"],
    dependencies=protected
)

api_router.include_router(
    courses.router,
    prefix="/courses",
    tags=["courses"],
    dependencies=protected
)
