"""
Google Gemini provider for menu recognition.

Sends the menu photo to the Gemini ``generateContent`` REST endpoint and
parses the JSON array of dishes the model returns.
"""

import base64
import json
import logging
import re
import time

import httpx
from pydantic import BaseModel, ValidationError

from allergen_api.core.config import ClientConfig
from allergen_api.core.exceptions import ConfigurationError
from allergen_api.models.menu import MenuItem

from .base import MenuRecognitionError, MenuRecognitionResult, MenuRecognitionService

logger = logging.getLogger(__name__)


MENU_EXTRACTION_PROMPT = """You are reading a photo of a restaurant menu.
Extract every **menu item** as an object with these fields:
1. "name": the name of the dish
2. "allergenIngredients": an object mapping each allergen to the ingredient(s) that cause it,
   e.g. { "dairy": ["cheese"], "gluten": ["bun"] }. Only allergens and their triggering ingredients.

Output must be a **valid JSON array** like:
[
  {
    "name": "Cheeseburger",
    "allergenIngredients": {
      "dairy": ["cheese"],
      "gluten": ["bun"],
      "egg": ["mayo"]
    }
  },
  {
    "name": "French Fries",
    "allergenIngredients": {}
  }
]

Rules:
- Only output "name" and "allergenIngredients" for each item.
- Only add an allergen key when you are confident it is present.
- If the photo is not a menu, return [].
- No markdown, no extra text, just raw JSON."""

_CODE_FENCE = re.compile(r"```json|```", re.IGNORECASE)


# Subset of the generateContent response we read
class _Part(BaseModel):
    text: str | None = None


class _Content(BaseModel):
    parts: list[_Part] = []


class _Candidate(BaseModel):
    content: _Content | None = None


class _GenerateContentResponse(BaseModel):
    candidates: list[_Candidate] = []


class GeminiMenuRecognition(MenuRecognitionService):
    """
    Menu recognition using Google Gemini vision models.
    """

    def __init__(self, config: ClientConfig, model: str = "gemini-1.5-flash"):
        """
        Initialize Gemini provider.

        Args:
            config: API key, base URL and timeout
            model: Gemini model name, with or without the "models/" prefix

        Raises:
            ConfigurationError: If no API key is configured
        """
        if not config.api_key:
            raise ConfigurationError("gemini_api_key", "Gemini menu recognition")

        self.base_url = config.base_url.rstrip("/")
        self.model = model.removeprefix("models/")
        self.timeout = config.timeout
        self._client = httpx.AsyncClient(
            timeout=config.timeout,
            headers={"x-goog-api-key": config.api_key},
        )

    @property
    def provider_name(self) -> str:
        return f"gemini/{self.model}"

    async def extract_menu(
        self,
        image_data: bytes,
        *,
        mime_type: str = "image/jpeg",
    ) -> MenuRecognitionResult:
        """
        Extract menu items from a photo using Gemini.
        """
        start_time = time.time()

        try:
            request_body = {
                "contents": [
                    {
                        "role": "user",
                        "parts": [
                            {"text": MENU_EXTRACTION_PROMPT},
                            {
                                "inline_data": {
                                    "mime_type": mime_type,
                                    "data": base64.b64encode(image_data).decode("utf-8"),
                                }
                            },
                        ],
                    }
                ],
                "generationConfig": {
                    "temperature": 0,
                    "maxOutputTokens": 4096,
                    "response_mime_type": "application/json",
                },
            }

            logger.info(f"Sending menu extraction request to Gemini ({self.model})")

            response = await self._client.post(
                f"{self.base_url}/models/{self.model}:generateContent",
                json=request_body,
            )

            if response.status_code != 200:
                raise MenuRecognitionError(
                    message=f"Gemini API error: {response.status_code}",
                    error_code="PROVIDER_ERROR",
                    provider=self.provider_name,
                    details={"status_code": response.status_code, "body": response.text[:2000]},
                )

            raw_text = self._extract_text(response)
            logger.debug(f"Raw Gemini response: {raw_text[:500]}...")

            menu_items = self._parse_menu_items(raw_text)
            processing_time = int((time.time() - start_time) * 1000)

            return MenuRecognitionResult(
                menu_items=menu_items,
                raw_response=raw_text,
                provider=self.provider_name,
                processing_time_ms=processing_time,
            )

        except httpx.RequestError as e:
            raise MenuRecognitionError(
                message=f"Failed to connect to Gemini: {e}",
                error_code="CONNECTION_ERROR",
                provider=self.provider_name,
            ) from e
        except MenuRecognitionError:
            raise
        except Exception as e:
            logger.exception("Unexpected error in menu recognition")
            raise MenuRecognitionError(
                message=f"Unexpected error: {e}",
                error_code="UNEXPECTED_ERROR",
                provider=self.provider_name,
            ) from e

    def _extract_text(self, response: httpx.Response) -> str:
        """Pull the first text part out of a generateContent response."""
        try:
            payload = _GenerateContentResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise MenuRecognitionError(
                message="Unexpected Gemini response shape",
                error_code="PARSE_ERROR",
                provider=self.provider_name,
                details={"body": response.text[:2000]},
            ) from e

        for candidate in payload.candidates:
            if candidate.content is None:
                continue
            for part in candidate.content.parts:
                if part.text:
                    return part.text

        raise MenuRecognitionError(
            message="Gemini returned no text",
            error_code="PARSE_ERROR",
            provider=self.provider_name,
            details={"body": response.text[:2000]},
        )

    def _parse_menu_items(self, raw_text: str) -> list[MenuItem]:
        """Parse the model's JSON array into menu items."""
        clean_text = _CODE_FENCE.sub("", raw_text).strip()

        try:
            data = json.loads(clean_text)
        except json.JSONDecodeError as e:
            raise MenuRecognitionError(
                message=f"Model output is not valid JSON: {e}",
                error_code="PARSE_ERROR",
                provider=self.provider_name,
                details={"raw_response": raw_text[:2000]},
            ) from e

        if not isinstance(data, list):
            raise MenuRecognitionError(
                message="Model output is not a JSON array",
                error_code="PARSE_ERROR",
                provider=self.provider_name,
                details={"raw_response": raw_text[:2000]},
            )

        items = []
        for entry in data:
            if not isinstance(entry, dict):
                logger.warning(f"Skipping non-object menu entry: {entry!r}")
                continue
            try:
                items.append(MenuItem.model_validate(entry))
            except ValidationError as e:
                logger.warning(f"Failed to parse menu item: {e}")
                continue

        return items

    async def health_check(self) -> bool:
        """Check that the configured model exists and the key is accepted."""
        try:
            response = await self._client.get(f"{self.base_url}/models/{self.model}")
            return response.status_code == 200
        except Exception as e:
            logger.error(f"Gemini health check failed: {e}")
            return False

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
