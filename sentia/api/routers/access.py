"""Premium access, paywall and quota endpoints."""

import logging
from typing import Any

from fastapi import APIRouter, Depends

from sentia.api.dependencies import get_app_context, get_scan_coordinator
from sentia.api.models import PremiumRequest
from sentia.orchestrator.context import AppContext
from sentia.orchestrator.scan_session import ScanCoordinator

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/quota")
async def get_quota(
    coordinator: ScanCoordinator = Depends(get_scan_coordinator),  # noqa: B008
) -> dict[str, Any]:
    """Today's scan usage; ``remaining`` is null for unlimited users."""
    status, _ = await coordinator.check_quota()
    return status.to_wire()


@router.get("/access/{feature}")
async def get_access(
    feature: str,
    ctx: AppContext = Depends(get_app_context),  # noqa: B008
) -> dict[str, Any]:
    result = await ctx.gate.can_access(feature)
    return result.to_wire()


@router.get("/paywall/{feature}")
async def get_paywall(
    feature: str,
    ctx: AppContext = Depends(get_app_context),  # noqa: B008
) -> dict[str, Any]:
    return ctx.gate.get_paywall_data(feature).to_wire()


@router.post("/premium")
async def set_premium(
    request: PremiumRequest,
    ctx: AppContext = Depends(get_app_context),  # noqa: B008
) -> dict[str, Any]:
    """Set the premium flag for a purchase already verified upstream.

    Trusted internal hook for the commerce provider's server-side integration.
    It does no receipt validation and must not be exposed to end users.
    """
    await ctx.gate.set_premium(request.is_premium)
    return {"isPremium": await ctx.gate.is_premium()}


@router.post("/premium/restore")
async def restore_premium(
    ctx: AppContext = Depends(get_app_context),  # noqa: B008
) -> dict[str, Any]:
    """Reload the persisted premium flag."""
    return {"isPremium": await ctx.gate.refresh()}
