"""Premium feature access gate."""

import asyncio
import logging
from typing import Iterable, Optional, Union

from sentia.config.constants import Feature, StorageKey
from sentia.infrastructure.storage import KeyValueStore
from sentia.services.access.models import FeatureAccessResult, PaywallData
from sentia.services.access.paywall import (
    GENERIC_PAYWALL_COPY,
    PAYWALL_COPY,
    PAYWALL_CTA,
    PREMIUM_FEATURE_LIST,
)

logger = logging.getLogger(__name__)

FeatureName = Union[Feature, str]


def _feature_key(feature: FeatureName) -> str:
    return feature.value if isinstance(feature, Feature) else str(feature)


class FeatureAccessGate:
    """Decides whether a feature is usable by the current user.

    The premium flag is read from storage once, on first use, and cached for
    the lifetime of the gate. Purchase, restore and reset go through
    ``set_premium``, ``refresh`` and ``reset``, which update the cache in the
    same locked step as the store write so no caller observes a stale flag.
    """

    def __init__(self, store: KeyValueStore, premium_features: Iterable[str]):
        self.store = store
        self.premium_features = frozenset(_feature_key(f) for f in premium_features)
        self._premium: Optional[bool] = None
        self._lock = asyncio.Lock()

    def requires_premium(self, feature: FeatureName) -> bool:
        return _feature_key(feature) in self.premium_features

    async def is_premium(self) -> bool:
        if self._premium is not None:
            return self._premium
        async with self._lock:
            if self._premium is None:
                stored = await self.store.get(StorageKey.IS_PREMIUM.value, False)
                self._premium = bool(stored)
                logger.debug(f"Premium flag loaded from storage: {self._premium}")
            return self._premium

    async def can_access(self, feature: FeatureName) -> FeatureAccessResult:
        """
        Check access to a feature.

        Args:
            feature: Feature name; names outside the premium set are always allowed

        Returns:
            FeatureAccessResult
        """
        if not self.requires_premium(feature):
            return FeatureAccessResult(can_access=True, requires_premium=False)

        premium = await self.is_premium()
        return FeatureAccessResult(
            can_access=premium,
            requires_premium=True,
            is_premium=premium,
        )

    def get_paywall_data(self, feature: FeatureName) -> PaywallData:
        """Feature-specific paywall copy, or the generic copy for unknown names."""
        title, description = PAYWALL_COPY.get(_feature_key(feature), GENERIC_PAYWALL_COPY)
        return PaywallData(
            title=title,
            description=description,
            features=list(PREMIUM_FEATURE_LIST),
            cta=PAYWALL_CTA,
        )

    async def set_premium(self, is_premium: bool) -> None:
        """Persist the premium flag after a purchase and update the cache."""
        async with self._lock:
            await self.store.set(StorageKey.IS_PREMIUM.value, bool(is_premium))
            self._premium = bool(is_premium)
        logger.info(f"Premium status set to {bool(is_premium)}")

    async def refresh(self) -> bool:
        """Re-read the persisted flag, as after a restore."""
        async with self._lock:
            stored = await self.store.get(StorageKey.IS_PREMIUM.value, False)
            self._premium = bool(stored)
            return self._premium

    async def reset(self) -> None:
        async with self._lock:
            await self.store.remove(StorageKey.IS_PREMIUM.value)
            self._premium = False

    def invalidate(self) -> None:
        """Drop the cached flag; the next check reads storage again."""
        self._premium = None
