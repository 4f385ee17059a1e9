from sentia.services.relevance.checker import RelevanceChecker
from sentia.services.relevance.models import RelevanceResult

__all__ = ["RelevanceChecker", "RelevanceResult"]
