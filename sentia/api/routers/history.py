"""Scan history endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from sentia.api.dependencies import get_app_context
from sentia.orchestrator.context import AppContext

router = APIRouter()


@router.get("")
async def list_history(
    ctx: AppContext = Depends(get_app_context),  # noqa: B008
) -> list[dict[str, Any]]:
    """Completed scans, newest first."""
    return [record.to_wire() for record in await ctx.history.list()]


@router.delete("/{scan_id}")
async def delete_scan(
    scan_id: str,
    ctx: AppContext = Depends(get_app_context),  # noqa: B008
) -> dict[str, str]:
    if not await ctx.history.delete(scan_id):
        raise HTTPException(status_code=404, detail=f"Scan '{scan_id}' not found")
    return {"status": "deleted", "scan_id": scan_id}


@router.delete("")
async def clear_history(
    ctx: AppContext = Depends(get_app_context),  # noqa: B008
) -> dict[str, str]:
    await ctx.history.clear()
    return {"status": "cleared"}
