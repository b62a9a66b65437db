"""Pydantic models for menu scanning and menu item matching."""

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import Field, computed_field, field_validator

from .common import CamelModel


def normalize_allergen_ingredients(raw: Any) -> dict[str, list[str]]:
    """
    Coerce a model-produced allergen mapping into ``{allergen: [ingredient, ...]}``.

    Lists are flattened one level and stringified, a bare string becomes a
    one-element list, anything else becomes an empty list.
    """
    if not isinstance(raw, Mapping):
        return {}

    normalized: dict[str, list[str]] = {}
    for allergen, value in raw.items():
        if isinstance(value, list):
            flat: list[str] = []
            for entry in value:
                if isinstance(entry, list):
                    flat.extend(str(v) for v in entry)
                else:
                    flat.append(str(entry))
            normalized[str(allergen)] = flat
        elif isinstance(value, str):
            normalized[str(allergen)] = [value]
        else:
            normalized[str(allergen)] = []
    return normalized


class MenuItem(CamelModel):
    """A single dish and the allergens it contains, keyed by allergen."""

    name: str = Field("", description="Dish name as printed on the menu")
    allergen_ingredients: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Allergen -> ingredients that triggered it, e.g. {'dairy': ['cheese']}",
    )

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("allergen_ingredients", mode="before")
    @classmethod
    def _coerce_allergens(cls, value: Any) -> dict[str, list[str]]:
        return normalize_allergen_ingredients(value)

    @computed_field
    @property
    def allergens(self) -> list[str]:
        return list(self.allergen_ingredients.keys())


class UploadMenuRequest(CamelModel):
    """Menu photo as a base64 string or a ``data:image/...;base64,`` URL."""

    image: str = Field(..., min_length=1)


class MenuScanData(CamelModel):
    menu_items: list[MenuItem] = Field(default_factory=list)
    source: Literal["camera"] = "camera"


class UploadMenuResponse(CamelModel):
    """
    Outcome of a menu scan.

    ``success=False`` with ``reason="no_menu"`` means the photo did not yield
    any menu items; the app asks the user to retake it.
    """

    success: bool
    gemini: bool | None = None
    data: MenuScanData | None = None
    reason: str | None = None


class MenuMatchRequest(CamelModel):
    source_items: list[MenuItem] = Field(default_factory=list)
    target_items: list[MenuItem] = Field(default_factory=list)


class MenuItemMatchOut(CamelModel):
    source_item: MenuItem
    target_item: MenuItem
    similarity: float = Field(..., ge=0.0, le=1.0)
    is_match: bool


class MenuMatchResponse(CamelModel):
    matches: list[MenuItemMatchOut] = Field(default_factory=list)
