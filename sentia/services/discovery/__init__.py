from sentia.services.discovery.models import NearbyResponse, NearbySuggestion, group_suggestions
from sentia.services.discovery.service import DiscoveryService

__all__ = ["DiscoveryService", "NearbyResponse", "NearbySuggestion", "group_suggestions"]
