"""
Caller identity resolved for every request.
"""

from typing import Optional

from pydantic import BaseModel


class Identity(BaseModel):
    """Authenticated user or anonymous guest."""

    authenticated: bool = False
    user_id: Optional[str] = None

    @classmethod
    def anonymous(cls) -> "Identity":
        return cls()

    @classmethod
    def for_user(cls, user_id: str) -> "Identity":
        return cls(authenticated=True, user_id=user_id)
