"""
User-facing messages for the analysis service.
"""

# =============================================================================
# Error Messages
# =============================================================================
ERROR_MESSAGES: dict[str, str] = {
    "network_error": "Unable to connect. Please check your connection.",
    "timeout": "Request took too long. Please try again.",
    "server_error": "Service temporarily unavailable. Please try again later.",
    "unauthorized": "Unauthorized. Please check your API key.",
    "rate_limited": "Too many requests. Please wait a moment.",
    "image_too_large": "Image is too large. Please use a smaller image.",
    "invalid_image": "Unable to process this image.",
    "no_image": "Please take or select a photo first.",
    "daily_limit_reached": "You've reached your daily scan limit.",
    "scan_in_progress": "This photo is already being analyzed.",
    "unknown_error": "Something went wrong. Please try again.",
}

# =============================================================================
# Relevance Gating
# =============================================================================
NOT_RELEVANT_MESSAGES: dict[str, str] = {
    "title": "SENTIA needs a wider view to understand this place.",
    "suggestion": "Try stepping back to capture more of the surroundings.",
}

# =============================================================================
# Progress Messages
# =============================================================================
PROGRESS_MESSAGES: dict[str, str] = {
    "checking_relevance": "Checking image...",
    "classifying": "Identifying category...",
    "analyzing": "Analyzing...",
}

# =============================================================================
# Confidence Labels
# =============================================================================
CONFIDENCE_LABELS: dict[str, str] = {
    "high": "High confidence",
    "medium": "Likely",
    "low": "Uncertain",
}

# =============================================================================
# Fallback Analysis
# =============================================================================
ANALYSIS_UNAVAILABLE_TITLE = "Analysis unavailable"
