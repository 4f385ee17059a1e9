from sentia.services.history.models import ScanRecord
from sentia.services.history.store import ScanHistory

__all__ = ["ScanHistory", "ScanRecord"]
