from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field


class TeacherRegister(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    department: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=1)


class TeacherRegistered(BaseModel):
    """Registration result. Never carries the password hash."""
    id: int
    name: str
    department: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(alias="accessToken")
    token_type: str = Field(default="bearer", alias="tokenType")


class TokenClaims(BaseModel):
    """Identity carried by a verified access token."""
    id: int
    name: Optional[str] = None
    email: str
    iat: Optional[int] = None
    exp: int


class AuthCheckResponse(BaseModel):
    success: bool = True
    user: TokenClaims
