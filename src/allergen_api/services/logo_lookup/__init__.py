"""
Logo Lookup Service - Facade pattern for brand logo APIs.

logo.dev is the initial provider.
"""

from .base import LogoCandidate, LogoLookupError, LogoLookupService
from .factory import get_logo_lookup_service

__all__ = [
    "LogoCandidate",
    "LogoLookupError",
    "LogoLookupService",
    "get_logo_lookup_service",
]
