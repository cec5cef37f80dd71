"""
Guest quota service.

Authenticated callers are never limited; anonymous callers share a per-IP
quota kept by the rate limit repository.
"""

from __future__ import annotations

from career_chat.core.config import Settings, get_settings
from career_chat.core.exceptions import RATE_LIMIT_MESSAGE, ForbiddenError, RateLimitError
from career_chat.core.logger import logger
from career_chat.interfaces.rate_limit_repository import IRateLimitRepository
from career_chat.models.identity import Identity
from career_chat.models.rate_limit import UNLIMITED_REMAINING


class RateLimitService:
    """Quota checks and administration for guest callers."""

    def __init__(self, repo: IRateLimitRepository, settings: Settings | None = None):
        self.repo = repo
        self._settings = settings or get_settings()

    async def charge(self, ip_address: str) -> int:
        """
        Check then charge one guest request.

        Returns:
            Remaining quota after the charge

        Raises:
            RateLimitError: The quota is exhausted (nothing is charged)
        """
        check = await self.repo.check(ip_address)
        if not check.allowed:
            logger.info(f"Guest request rejected for {ip_address}: quota exhausted")
            raise RateLimitError(RATE_LIMIT_MESSAGE, details={"remaining": 0})

        charge = await self.repo.increment(ip_address)
        if not charge.charged:
            # Another request took the last slot between check and increment
            raise RateLimitError(RATE_LIMIT_MESSAGE, details={"remaining": 0})
        return charge.remaining

    async def status_for(self, identity: Identity, ip_address: str) -> int:
        """Remaining quota, or UNLIMITED_REMAINING for signed-in callers."""
        if identity.authenticated:
            return UNLIMITED_REMAINING
        return await self.repo.status(ip_address)

    async def reset(self, ip_address: str) -> None:
        """Clear an IP's quota. Not available in production."""
        if self._settings.is_production:
            raise ForbiddenError("Rate limit reset is only available in development")
        await self.repo.reset(ip_address)
