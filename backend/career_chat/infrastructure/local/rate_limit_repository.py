"""
SQLAlchemy implementation of the guest quota store.

Every mutating operation runs in a single transaction whose first statement is
a write, so concurrent requests for the same IP serialise on the database lock
instead of racing on a read-modify-write.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from career_chat.core.config import get_settings
from career_chat.core.logger import logger
from career_chat.infrastructure.local.database import (
    AnonymousRequestORM,
    get_session_factory,
    storage_errors,
)
from career_chat.interfaces.rate_limit_repository import IRateLimitRepository
from career_chat.models.rate_limit import RateLimitCharge, RateLimitCheck
from career_chat.utils.datetime_utils import utcnow_naive

_DIALECT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


class SqlRateLimitRepository(IRateLimitRepository):
    """Per-IP request counter with a rolling reset window."""

    def __init__(
        self,
        session_factory=None,
        limit: Optional[int] = None,
        window: Optional[timedelta] = None,
        clock: Callable[[], datetime] = utcnow_naive,
    ):
        settings = get_settings()
        self._session_factory = session_factory or get_session_factory()
        self._limit = settings.ANONYMOUS_REQUEST_LIMIT if limit is None else limit
        self._window = window or timedelta(hours=settings.RATE_LIMIT_WINDOW_HOURS)
        self._clock = clock

    @property
    def limit(self) -> int:
        return self._limit

    def _remaining(self, count: int) -> int:
        return max(0, self._limit - count)

    async def _open_window(self, session: AsyncSession, ip_address: str, now: datetime) -> None:
        """Ensure a live record exists: insert when missing, restart when expired."""
        dialect = session.get_bind().dialect.name
        insert = _DIALECT_INSERTS.get(dialect)
        if insert is None:
            raise NotImplementedError(f"Rate limiting is not supported on {dialect}")

        await session.execute(
            insert(AnonymousRequestORM)
            .values(
                ip_address=ip_address,
                count=0,
                reset_at=now + self._window,
                created_at=now,
                updated_at=now,
            )
            .on_conflict_do_nothing(index_elements=["ip_address"])
        )
        result = await session.execute(
            update(AnonymousRequestORM)
            .where(
                AnonymousRequestORM.ip_address == ip_address,
                AnonymousRequestORM.reset_at < now,
            )
            .values(count=0, reset_at=now + self._window, updated_at=now)
        )
        if result.rowcount:
            logger.debug(f"Rate limit window restarted for {ip_address}")

    async def _current_count(self, session: AsyncSession, ip_address: str) -> int:
        count = await session.scalar(
            select(AnonymousRequestORM.count).where(
                AnonymousRequestORM.ip_address == ip_address
            )
        )
        return count or 0

    async def check(self, ip_address: str) -> RateLimitCheck:
        """Check the quota, creating or restarting the window as needed."""
        async with storage_errors("rate_limit_check"):
            async with self._session_factory() as session:
                now = self._clock()
                await self._open_window(session, ip_address, now)
                count = await self._current_count(session, ip_address)
                await session.commit()

        return RateLimitCheck(allowed=count < self._limit, remaining=self._remaining(count))

    async def increment(self, ip_address: str) -> RateLimitCharge:
        """Charge one request; never pushes the count past the limit."""
        async with storage_errors("rate_limit_increment"):
            async with self._session_factory() as session:
                now = self._clock()
                await self._open_window(session, ip_address, now)
                result = await session.execute(
                    update(AnonymousRequestORM)
                    .where(
                        AnonymousRequestORM.ip_address == ip_address,
                        AnonymousRequestORM.count < self._limit,
                    )
                    .values(count=AnonymousRequestORM.count + 1, updated_at=now)
                )
                charged = result.rowcount == 1
                count = await self._current_count(session, ip_address)
                await session.commit()

        if not charged:
            logger.info(f"Rate limit exhausted for {ip_address}")
        return RateLimitCharge(remaining=self._remaining(count), charged=charged)

    async def status(self, ip_address: str) -> int:
        """Remaining quota without creating or updating anything."""
        async with storage_errors("rate_limit_status"):
            async with self._session_factory() as session:
                result = await session.execute(
                    select(AnonymousRequestORM).where(
                        AnonymousRequestORM.ip_address == ip_address
                    )
                )
                record = result.scalar_one_or_none()

        if record is None or record.reset_at < self._clock():
            return self._limit
        return self._remaining(record.count)

    async def reset(self, ip_address: str) -> None:
        """Forget an IP's counter."""
        async with storage_errors("rate_limit_reset"):
            async with self._session_factory() as session:
                await session.execute(
                    delete(AnonymousRequestORM).where(
                        AnonymousRequestORM.ip_address == ip_address
                    )
                )
                await session.commit()
        logger.info(f"Rate limit reset for {ip_address}")
