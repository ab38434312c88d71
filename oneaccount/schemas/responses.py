from typing import Any, Literal

from pydantic import BaseModel, Field


class SuccessOut(BaseModel):
    success: Literal[True] = True


class ErrorOut(BaseModel):
    error: str = Field(..., description="Short, client-safe reason")


class AuthorizedOut(BaseModel):
    authenticated: bool
    data: dict[str, Any] = Field(default_factory=dict)
