"""Allergen Scan API: backend-for-frontend for the menu allergen scanner app."""

__version__ = "1.0.0"
