"""Form Schemas — registration, login, post submission and comment forms.

Invariants:
    - Usernames are stripped, 1-64 chars, no whitespace inside
    - Passwords are never stripped (whitespace is significant) but must be non-empty
    - Post links must be http(s) URLs
"""

from pydantic import BaseModel, Field, field_validator


class RegistrationForm(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    email: str = Field(min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(min_length=1, max_length=1024)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("username cannot be empty or whitespace")
        if any(c.isspace() for c in v):
            raise ValueError("username cannot contain whitespace")
        return v


class LoginForm(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=1024)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        return v.strip()


class PostForm(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    link: str = Field(min_length=1, max_length=2048, pattern=r"^https?://\S+$")

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty or whitespace")
        return v


class CommentForm(BaseModel):
    comment: str = Field(min_length=1, max_length=10_000)
    parent_comment_id: int | None = Field(None, ge=1)

    @field_validator("comment")
    @classmethod
    def strip_comment(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("comment cannot be empty or whitespace")
        return v
