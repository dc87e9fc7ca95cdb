from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

# Field contents are checked by the service so that every failure carries
# the same "invalid <field>" message; only types are enforced here.


# Auth / Tokens

class TokenResponse(BaseModel):
    """Token response for successful login"""
    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field("bearer", description="Token type")


class StatusResponse(BaseModel):
    """Outcome of a mutating operation"""
    ok: bool = True


# Users

class UserCreateRequest(BaseModel):
    """Request model to register a new user"""
    email: str = Field(..., description="User email")
    password: str = Field(..., description="Plaintext password")


class PasswordUpdateRequest(BaseModel):
    """Change password of the current user"""
    password: str = Field(..., description="Current password")
    new_password: str = Field(..., description="Replacement password")


class UnregisterRequest(BaseModel):
    """Confirm account removal with the current password"""
    password: str


# Notes

class NoteCreateRequest(BaseModel):
    """Create note request"""
    date: datetime
    text: str


class NoteUpdateRequest(BaseModel):
    """Replace the text of a note"""
    text: str


class NoteResponse(BaseModel):
    """Note response model"""
    id: str
    date: datetime
    text: str


# Contacts

class ContactCreateRequest(BaseModel):
    """Add an entry to the current user's address book"""
    name: str
    surname: str
    phone: Optional[str] = None
    email: str


class ContactResponse(BaseModel):
    """Contact response model"""
    id: str
    name: str
    surname: str
    phone: Optional[str] = None
    email: str
