"""
Authentication schemas

Pydantic models for auth request validation and response serialization.
"""

from typing import Optional, List
from pydantic import BaseModel, EmailStr, Field, field_validator

from scoreboard.utils.notifications import Notification


class UserSchema(BaseModel):
    """Authenticated user as reported by Supabase"""
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    email_confirmed: bool = False


class SessionSchema(BaseModel):
    """Supabase session tokens"""
    access_token: str
    refresh_token: str
    expires_at: Optional[int] = None
    token_type: str = "bearer"


class UserCreateSchema(BaseModel):
    """Schema for signing up"""
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    name: Optional[str] = Field(None, max_length=100)

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        return v.lower()

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if v is not None:
            v = v.strip()
        return v or None


class UserLoginSchema(BaseModel):
    """Schema for signing in"""
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        return v.lower()


class PasswordResetSchema(BaseModel):
    """Schema for requesting a password reset link"""
    email: EmailStr


class PasswordResetCompleteSchema(BaseModel):
    """Schema for setting a new password from a reset link"""
    access_token: str = Field(..., min_length=1)
    refresh_token: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=128)


class RefreshSchema(BaseModel):
    refresh_token: str = Field(..., min_length=1)


class PasswordStrengthRequest(BaseModel):
    password: str = ""


class PasswordStrengthSchema(BaseModel):
    """Strength meter state for a candidate password"""
    score: int = Field(..., ge=0, le=4)
    label: str
    color: str
    bars: List[str]


class AuthResponseSchema(BaseModel):
    """Result of an auth action"""
    success: bool = True
    user: Optional[UserSchema] = None
    session: Optional[SessionSchema] = None
    notification: Optional[Notification] = None


class SessionStatusSchema(BaseModel):
    """Whether the caller already holds a valid session"""
    authenticated: bool
    user: Optional[UserSchema] = None
    redirect_to: Optional[str] = None
