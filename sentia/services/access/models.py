"""Feature access and paywall models."""

from typing import Optional

from pydantic import Field

from sentia.services.base import CamelModel


class FeatureAccessResult(CamelModel):
    """Whether the current user may use a feature."""

    can_access: bool
    requires_premium: bool
    is_premium: Optional[bool] = None


class PaywallData(CamelModel):
    """Copy shown when a premium feature is blocked."""

    title: str
    description: str
    features: list[str] = Field(default_factory=list)
    cta: str
