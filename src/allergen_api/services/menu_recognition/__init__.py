"""
Menu Recognition Service - Facade pattern for menu photo understanding.

Gemini is the initial provider: it reads a menu photo and returns each dish
with the allergens it contains.
"""

from .base import (
    MenuRecognitionError,
    MenuRecognitionResult,
    MenuRecognitionService,
)
from .factory import get_menu_recognition_service

__all__ = [
    "MenuRecognitionError",
    "MenuRecognitionResult",
    "MenuRecognitionService",
    "get_menu_recognition_service",
]
