"""Process-wide application context."""

import logging
from collections.abc import Callable
from datetime import date
from typing import Any, Optional

import httpx

from sentia.config.settings import Settings
from sentia.infrastructure.http import TransportClient
from sentia.infrastructure.storage import KeyValueStore, create_store
from sentia.orchestrator.pipeline import AnalysisPipeline
from sentia.services.access import FeatureAccessGate
from sentia.services.discovery import DiscoveryService
from sentia.services.history import ScanHistory
from sentia.services.quota import ScanQuotaTracker

logger = logging.getLogger(__name__)


class AppContext:
    """Owns the shared state of one process.

    The premium cache lives in ``gate`` and the daily counters in ``quota``;
    both are constructed once here and passed by reference, so tests can build
    a fresh context per case.
    """

    def __init__(
        self,
        settings: Settings,
        store: KeyValueStore,
        client: TransportClient,
        today: Callable[[], date] = date.today,
    ):
        self.settings = settings
        self.store = store
        self.client = client
        self.gate = FeatureAccessGate(store, settings.premium_features)
        self.quota = ScanQuotaTracker(store, settings.free_daily_scans, today=today)
        self.history = ScanHistory(store, settings.max_scan_history)
        self.discovery = DiscoveryService(client, settings.nearby_max_suggestions)
        self.pipeline = AnalysisPipeline.from_client(client)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        store: Optional[KeyValueStore] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        today: Callable[[], date] = date.today,
    ) -> "AppContext":
        """Build a context with the configured store and transport client."""
        return cls(
            settings=settings,
            store=store if store is not None else create_store(settings.storage_path),
            client=TransportClient.from_settings(settings, transport=transport),
            today=today,
        )

    async def close(self) -> None:
        await self.client.close()
        logger.info("Application context closed")

    async def __aenter__(self) -> "AppContext":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
