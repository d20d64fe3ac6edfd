"""Pydantic schemas for API requests and responses."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shortlink.timefmt import parse_expiry


class CreateRequest(BaseModel):
    """Request to create a short URL."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {"real-url": "https://example.com/very/long/path", "short-slug": "", "expires": ""},
                {"real-url": "https://github.com/user/repo", "short-slug": "myrepo", "expires": "31/12/2030 23:59"},
            ]
        },
    )

    real_url: str = Field(..., alias="real-url", description="The URL to shorten")
    short_slug: Optional[str] = Field(None, alias="short-slug", description="Optional custom slug")
    expires: Optional[datetime] = Field(None, description="Optional expiry, dd/mm/yyyy HH:MM")

    @field_validator("expires", mode="before")
    @classmethod
    def parse_expires(cls, v):
        """Parse the dd/mm/yyyy HH:MM expiry format."""
        if v is None or isinstance(v, datetime):
            return v
        if not isinstance(v, str):
            raise ValueError("expires must be a string in dd/mm/yyyy HH:MM format")
        return parse_expiry(v)


class CreateResponse(BaseModel):
    """Response to a create request. Exactly one field is non-empty."""

    model_config = ConfigDict(populate_by_name=True)

    short_url: str = Field("", alias="short-url")
    error_message: str = Field("", alias="error-message")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    cache: str = Field(..., description="Cache status")
    timestamp: datetime = Field(..., description="Check timestamp")
