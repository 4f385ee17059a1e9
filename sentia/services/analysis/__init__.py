from sentia.services.analysis.analyzer import CultureAnalyzer
from sentia.services.analysis.models import AnalysisResult

__all__ = ["AnalysisResult", "CultureAnalyzer"]
