"""Daily scan quota with date rollover."""

import asyncio
import logging
import math
from collections.abc import Callable
from datetime import date

from sentia.config.constants import StorageKey
from sentia.infrastructure.storage import KeyValueStore
from sentia.services.quota.models import QuotaReservation, QuotaStatus, ScanQuotaState

logger = logging.getLogger(__name__)


class ScanQuotaTracker:
    """Counts billable scans per calendar day.

    The stored counter resets to zero whenever the stored date differs from
    today. Every read-modify-write happens under one lock so that concurrent
    increments never write back a stale count.
    """

    def __init__(
        self,
        store: KeyValueStore,
        daily_limit: int = 3,
        today: Callable[[], date] = date.today,
    ):
        self.store = store
        self.daily_limit = daily_limit
        self._today = today
        self._lock = asyncio.Lock()

    async def _load_rolled_over(self) -> ScanQuotaState:
        """Read the stored state, resetting and persisting it on a new day.

        Must be called with the lock held.
        """
        today = self._today()
        stored_date = await self.store.get(StorageKey.LAST_SCAN_DATE.value)
        used = await self.store.get(StorageKey.SCAN_COUNT_TODAY.value, 0)

        if stored_date != today.isoformat():
            if stored_date is not None:
                logger.info(f"Scan quota rollover: {stored_date} -> {today.isoformat()}")
            used = 0
            await self.store.set_many(
                {
                    StorageKey.SCAN_COUNT_TODAY.value: 0,
                    StorageKey.LAST_SCAN_DATE.value: today.isoformat(),
                }
            )

        return ScanQuotaState(
            used_today=max(int(used or 0), 0),
            last_reset_date=today,
            daily_limit=self.daily_limit,
        )

    async def get_state(self) -> ScanQuotaState:
        async with self._lock:
            return await self._load_rolled_over()

    async def get_today_count(self) -> int:
        state = await self.get_state()
        return state.used_today

    async def can_scan(self, is_premium: bool) -> QuotaStatus:
        """
        Check whether another scan is allowed today.

        Args:
            is_premium: Premium users are never limited

        Returns:
            QuotaStatus with remaining scans (``math.inf`` for premium)
        """
        if is_premium:
            used = await self.get_today_count()
            return QuotaStatus(can_scan=True, remaining=math.inf, used=used, limit=self.daily_limit)

        state = await self.get_state()
        remaining = max(self.daily_limit - state.used_today, 0)
        return QuotaStatus(
            can_scan=state.used_today < self.daily_limit,
            remaining=remaining,
            used=state.used_today,
            limit=self.daily_limit,
        )

    async def increment_count(self) -> int:
        """Record one billable scan; returns the new count for today."""
        async with self._lock:
            state = await self._load_rolled_over()
            new_count = state.used_today + 1
            await self.store.set_many(
                {
                    StorageKey.SCAN_COUNT_TODAY.value: new_count,
                    StorageKey.LAST_SCAN_DATE.value: state.last_reset_date.isoformat(),
                }
            )
        logger.debug(f"Scan count today: {new_count}/{self.daily_limit}")
        return new_count

    async def try_reserve(self) -> QuotaReservation:
        """
        Claim one of today's free scans if any is left.

        The check and the increment run under the same lock, so concurrent
        scans can never claim more slots than the daily limit.

        Returns:
            QuotaReservation; ``granted`` is False when the limit is reached
        """
        async with self._lock:
            state = await self._load_rolled_over()
            if state.used_today >= self.daily_limit:
                status = QuotaStatus(
                    can_scan=False, remaining=0, used=state.used_today, limit=self.daily_limit
                )
                return QuotaReservation(granted=False, day=state.last_reset_date, status=status)

            new_count = state.used_today + 1
            await self.store.set_many(
                {
                    StorageKey.SCAN_COUNT_TODAY.value: new_count,
                    StorageKey.LAST_SCAN_DATE.value: state.last_reset_date.isoformat(),
                }
            )
        logger.debug(f"Scan slot reserved: {new_count}/{self.daily_limit}")
        status = QuotaStatus(
            can_scan=new_count < self.daily_limit,
            remaining=self.daily_limit - new_count,
            used=new_count,
            limit=self.daily_limit,
        )
        return QuotaReservation(granted=True, day=state.last_reset_date, status=status)

    async def release(self, reservation: QuotaReservation) -> int:
        """Give back a slot from a scan that was not billable.

        A reservation from an earlier day is dropped, since the counter has
        already rolled over.
        """
        async with self._lock:
            state = await self._load_rolled_over()
            if not reservation.granted or reservation.day != state.last_reset_date:
                return state.used_today
            new_count = max(state.used_today - 1, 0)
            await self.store.set(StorageKey.SCAN_COUNT_TODAY.value, new_count)
        logger.debug(f"Scan slot released: {new_count}/{self.daily_limit}")
        return new_count

    async def reset_count(self) -> None:
        async with self._lock:
            await self.store.set_many(
                {
                    StorageKey.SCAN_COUNT_TODAY.value: 0,
                    StorageKey.LAST_SCAN_DATE.value: self._today().isoformat(),
                }
            )
