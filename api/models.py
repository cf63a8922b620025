"""Pydantic models for API request/response validation.

Defines data structures for the breach check endpoints.
Missing fields default to empty strings so they fail the same validators
as explicitly empty values.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from breach_check import is_valid_digest


class PasswordCheckRequest(BaseModel):
    """Request model for checking a raw password."""
    password: str = Field(default="", validate_default=True, description="Password to check")

    @field_validator('password')
    @classmethod
    def password_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("Password not provided")
        try:
            v.encode('utf-8')
        except UnicodeEncodeError:
            # Lone surrogates decode from JSON escapes but have no UTF-8 form
            raise ValueError("Invalid request body")
        return v


class HashCheckRequest(BaseModel):
    """Request model for checking a pre-computed SHA-1 hash.

    Uppercase hex is accepted and lowercased before validation.
    """
    hash: str = Field(default="", validate_default=True, description="SHA-1 hash, 40 hex characters")

    @field_validator('hash')
    @classmethod
    def hash_is_sha1(cls, v: str) -> str:
        v = v.lower()
        if not is_valid_digest(v):
            raise ValueError("Invalid SHA1 hash")
        return v


class CheckResponse(BaseModel):
    """Response model for both check endpoints.

    ``count`` is omitted when zero and ``error`` only appears on failure.
    """
    prefix: str
    found: bool = False
    count: Optional[int] = None
    error: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    timestamp: datetime
    range_url: str
