"""FastAPI dependencies."""

from fastapi import Request

from sentia.orchestrator.context import AppContext
from sentia.orchestrator.scan_session import ScanCoordinator


def get_app_context(request: Request) -> AppContext:
    """Application context built during startup."""
    return request.app.state.context


def get_scan_coordinator(request: Request) -> ScanCoordinator:
    return request.app.state.coordinator
