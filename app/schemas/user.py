"""
Pydantic schemas for signup / login request and response bodies.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class SignupRequest(BaseModel):
    """Body of POST /signup."""

    username: str = Field(
        ...,
        min_length=1,
        max_length=50,
        examples=["suzanne"],
    )
    email: EmailStr = Field(
        ...,
        examples=["suzanne@example.com"],
    )
    password: str = Field(
        ...,
        min_length=1,
        description="Plain-text password, hashed with bcrypt before storage",
    )


class LoginRequest(BaseModel):
    """
    Body of POST /login.

    Both fields are optional: without them the session cookie is used.
    """

    email: str | None = None
    password: str | None = None

    def has_credentials(self) -> bool:
        return bool(self.email and self.password)


class UserResponse(BaseModel):
    """Public user fields."""

    id: int
    username: str
    email: str

    model_config = ConfigDict(from_attributes=True)
