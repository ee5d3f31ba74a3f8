"""Pydantic schemas for owner credential checks."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Schema for a credential check."""

    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1, max_length=128)


class LoginResponse(BaseModel):
    """Schema for a successful credential check. No token is issued."""

    authorized: bool = True
    username: str


class LoginDetailResponse(BaseModel):
    """Schema for single login result."""

    data: LoginResponse
