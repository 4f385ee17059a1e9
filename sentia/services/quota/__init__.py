from sentia.services.quota.models import QuotaReservation, QuotaStatus, ScanQuotaState
from sentia.services.quota.tracker import ScanQuotaTracker

__all__ = ["QuotaReservation", "QuotaStatus", "ScanQuotaState", "ScanQuotaTracker"]
