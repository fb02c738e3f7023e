"""
Shared response envelopes.
"""

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Plain success envelope with a message."""

    success: bool = Field(default=True, description="Whether the request succeeded")
    message: str = Field(..., description="Human-readable result", example="Server is running")
