from sentia.services.access.gate import FeatureAccessGate
from sentia.services.access.models import FeatureAccessResult, PaywallData

__all__ = ["FeatureAccessGate", "FeatureAccessResult", "PaywallData"]
