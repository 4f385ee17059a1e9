"""HTTP transport to the remote vision service."""

from sentia.infrastructure.http.client import RequestConfig, TransportClient
from sentia.infrastructure.http.image import ImageRef, encode_image

__all__ = ["ImageRef", "RequestConfig", "TransportClient", "encode_image"]
