# user_model.py
# This file defines the User model (SQLModel) and the login request schema.

from typing import Optional
from sqlmodel import SQLModel, Field
from pydantic import BaseModel


# Pydantic request model (used for API input)
class UserLogin(BaseModel):
    """Request model for logging in the admin."""
    email: str
    password: str


# SQLModel table for User
class User(SQLModel, table=True):
    """
    Portal users. Only the admin logs in; presenters have no credentials
    and exist so their predictions can be ranked.
    """
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: Optional[str] = Field(default=None, index=True)
    password_hash: Optional[str] = None
    is_admin: bool = Field(default=False)
