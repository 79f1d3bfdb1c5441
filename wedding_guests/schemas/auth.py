"""
Pydantic models for the login exchange.
"""

from pydantic import BaseModel, ConfigDict, Field


class Token(BaseModel):
    """Response body of ``POST /auth/login``."""

    access_token: str = Field(..., examples=["eyJhbGciOiJIUzI1NiJ9..."])
    token_type: str = Field("bearer", examples=["bearer"])

    model_config = ConfigDict(extra="allow")
