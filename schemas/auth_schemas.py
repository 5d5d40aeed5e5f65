"""
Recipe Box Authentication Schemas
Pydantic models for authentication requests and responses
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class UserCreate(BaseModel):
    """Schema for user registration"""
    model_config = ConfigDict(extra="forbid")

    username: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)

    @field_validator("username")
    @classmethod
    def validate_username(cls, v):
        """Reject whitespace-only usernames"""
        v = v.strip()
        if not v:
            raise ValueError("Username is required")
        return v


class UserLogin(BaseModel):
    """Schema for user login"""
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(..., min_length=1)


class User(BaseModel):
    """Schema for user response; never carries the password hash"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    email: str
    created_at: Optional[datetime] = None


class RegisterResponse(BaseModel):
    """Schema for registration response"""
    message: str = "Registration successful"
    user: User


class LoginResponse(BaseModel):
    """Schema for login response"""
    message: str = "Login successful"
    token: str
    token_type: str = "bearer"
    expires_in: int
    user: User
