"""
User-related Pydantic models
"""

from typing import Optional
from pydantic import BaseModel, Field


class UserPayload(BaseModel):
    """Body for create and update; presence is checked by the service"""
    name: Optional[str] = None
    correo: Optional[str] = Field(None, description="Email address of the user")


class User(BaseModel):
    id: int
    name: Optional[str] = None
    email: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
