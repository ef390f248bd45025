"""
Postboard Backend — User & Login Schemas
==========================================

What:  Pydantic models for the register/login/user endpoints.
Why:   Request bodies are validated field by field before a handler runs;
       responses control exactly which user columns leave the server.

Security:
    No response model has a password or password_hash field. The ORM row is
    always converted through `UserResponse.from_model()`.
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from postboard.models.user import User


class RegisterRequest(BaseModel):
    """Body of POST /register."""
    user_name: str = Field(min_length=3, max_length=100, description="Unique login name")
    password: str = Field(min_length=8, max_length=128, description="Plaintext password (hashed before storage)")

    @field_validator("user_name")
    @classmethod
    def strip_user_name(cls, v: str) -> str:
        stripped = v.strip()
        if len(stripped) < 3:
            raise ValueError("user_name must contain at least 3 non-blank characters")
        return stripped


class LoginRequest(BaseModel):
    """Body of POST /login. No strength rules: any mismatch is just a failed login."""
    user_name: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1, max_length=128)

    @field_validator("user_name")
    @classmethod
    def strip_user_name(cls, v: str) -> str:
        """Names are stored stripped, so they are looked up stripped."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("user_name must not be blank")
        return stripped


class RegisterResponse(BaseModel):
    id: int
    user_name: str
    message: str = "User registered successfully."


class LoginResponse(BaseModel):
    access_token: str = Field(description="Signed JWT; send as 'Authorization: Bearer <token>'")
    token_type: str = "bearer"
    expires_at: datetime
    id: int
    user_name: str
    message: str = "Login successful."


class UserResponse(BaseModel):
    id: int
    user_name: str
    created_at: datetime

    @classmethod
    def from_model(cls, user: User) -> "UserResponse":
        return cls(id=user.id, user_name=user.username, created_at=user.created_at)
