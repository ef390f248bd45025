"""
Postboard Backend — Post Schemas
==================================

What:  Pydantic models for the /posts endpoints.
Why:   Explicit per-field validation replaces duck-typed JSON binding; every
       failing field is reported in the 400 response.

Ownership fields:
    Create, update and delete all carry the acting `user_id` in the body.
    With ENFORCE_POST_OWNERSHIP on, update/delete only touch a row whose
    owner matches it.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

# Page bounds for GET /posts
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


class CreatePostRequest(BaseModel):
    user_id: int = Field(ge=1, description="Owner of the new post")
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)

    @field_validator("title", "content")
    @classmethod
    def reject_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class UpdatePostRequest(BaseModel):
    user_id: int = Field(ge=1, description="Caller claiming ownership of the post")
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    content: Optional[str] = Field(default=None, min_length=1)

    @field_validator("title", "content")
    @classmethod
    def reject_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("must not be blank")
        return v

    @model_validator(mode="after")
    def require_a_change(self) -> "UpdatePostRequest":
        if self.title is None and self.content is None:
            raise ValueError("at least one of 'title' or 'content' must be provided")
        return self


class DeletePostRequest(BaseModel):
    user_id: int = Field(ge=1, description="Caller claiming ownership of the post")


class PostResponse(BaseModel):
    id: int
    user_id: int
    title: str
    content: str
    created_at: datetime

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    message: str
