"""
Guest quota models.
"""

from pydantic import BaseModel, Field

UNLIMITED_REMAINING = -1


class RateLimitCheck(BaseModel):
    """Result of a read-only quota check."""

    allowed: bool
    remaining: int = Field(..., ge=0)


class RateLimitCharge(BaseModel):
    """Result of charging one request against the quota."""

    remaining: int = Field(..., ge=0)
    charged: bool = True
