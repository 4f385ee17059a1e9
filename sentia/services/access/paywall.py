"""Paywall copy per premium feature."""

from sentia.config.constants import Feature

PREMIUM_FEATURE_LIST: tuple[str, ...] = (
    "Unlimited scans",
    "Audio guides for every place",
    "Nearby cultural discovery",
)

PAYWALL_CTA = "Upgrade to Premium"

PAYWALL_COPY: dict[str, tuple[str, str]] = {
    Feature.AUDIO_GUIDE.value: (
        "Audio Guides",
        "Listen to cultural stories about the places you visit.",
    ),
    Feature.NEARBY_DISCOVERY.value: (
        "Nearby Discovery",
        "Find museums, galleries, and cultural spots nearby.",
    ),
    Feature.UNLIMITED_SCANS.value: (
        "Unlimited Scans",
        "Scan as many places as you like without limits.",
    ),
}

GENERIC_PAYWALL_COPY: tuple[str, str] = (
    "SENTIA Premium",
    "Unlock all premium features.",
)
