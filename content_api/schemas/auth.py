"""Schemas for registration, login and the token response."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from content_api.schemas.user import UserResponse

MIN_PASSWORD_LENGTH = 8


class RegisterRequest(BaseModel):
    """Self-registration payload. New accounts always get the employee role."""

    model_config = ConfigDict(str_strip_whitespace=True)

    email: EmailStr = Field(..., description="Login email (stored lowercase)")
    full_name: str = Field(..., min_length=1, max_length=150)
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=128)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        """Require at least one letter and one digit."""
        if not any(c.isalpha() for c in v) or not any(c.isdigit() for c in v):
            raise ValueError("Password must contain at least one letter and one digit")
        return v


class LoginRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class TokenResponse(BaseModel):
    """Bearer token returned by register and login."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user: UserResponse
