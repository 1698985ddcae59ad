from fastapi import APIRouter, Depends, status
from school_admin.api.deps import get_auth_service, require_teacher
from school_admin.schemas.auth import (
    AuthCheckResponse,
    LoginRequest,
    TeacherRegister,
    TeacherRegistered,
    TokenClaims,
    TokenResponse,
)
from school_admin.services.teacher.auth import AuthService

router = APIRouter()


@router.post("/register", response_model=TeacherRegistered, status_code=status.HTTP_201_CREATED)
def register_teacher(
    payload: TeacherRegister,
    auth: AuthService = Depends(get_auth_service)
):
    """
    Register a teacher account

    Required: **name**, **department**, **email**, **password**.
    A teacher with the same name, department and email is rejected with 409.
    """
    teacher = auth.register(payload)
    return TeacherRegistered.model_validate(teacher)


@router.post("/login", response_model=TokenResponse)
def login_teacher(
    payload: LoginRequest,
    auth: AuthService = Depends(get_auth_service)
):
    """
    Exchange email and password for a bearer token

    Send it on protected requests as `Authorization: Bearer <accessToken>`.
    """
    token = auth.login(payload.email, payload.password)
    return TokenResponse(access_token=token)


@router.get("/checkTeacherAuth", response_model=AuthCheckResponse)
def check_teacher_auth(user: TokenClaims = Depends(require_teacher)):
    """Echo the identity carried by the bearer token."""
    return AuthCheckResponse(user=user)
