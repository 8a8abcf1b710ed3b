"""HTTP layer: header/URL construction and the single-POST connector."""

from .connector import HttpConnector, normalize_response_headers

__all__ = ["HttpConnector", "normalize_response_headers"]
