"""
Rate limit repository interface.

Defines the contract for the per-IP guest quota store.
"""

from abc import ABC, abstractmethod

from career_chat.models.rate_limit import RateLimitCharge, RateLimitCheck


class IRateLimitRepository(ABC):
    """Abstract interface for guest quota persistence."""

    @property
    @abstractmethod
    def limit(self) -> int:
        """Requests allowed per window."""
        pass

    @abstractmethod
    async def check(self, ip_address: str) -> RateLimitCheck:
        """
        Check the quota without charging a request.

        Creates a fresh record when none exists and resets an expired window.

        Args:
            ip_address: Client IP

        Returns:
            Whether a request is allowed and how many remain
        """
        pass

    @abstractmethod
    async def increment(self, ip_address: str) -> RateLimitCharge:
        """
        Charge one request against the current window.

        The charge is an atomic conditional update: it never pushes the
        count past the limit.

        Args:
            ip_address: Client IP

        Returns:
            Remaining quota after the charge and whether the charge happened
        """
        pass

    @abstractmethod
    async def status(self, ip_address: str) -> int:
        """
        Remaining quota, read-only.

        Args:
            ip_address: Client IP

        Returns:
            Remaining requests in the current window
        """
        pass

    @abstractmethod
    async def reset(self, ip_address: str) -> None:
        """
        Delete the record for an IP (no-op when missing).

        Args:
            ip_address: Client IP
        """
        pass
