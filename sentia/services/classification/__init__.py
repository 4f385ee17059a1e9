from sentia.services.classification.classifier import CategoryClassifier
from sentia.services.classification.models import ClassificationResult

__all__ = ["CategoryClassifier", "ClassificationResult"]
