"""
Menu photo scanning.

Decodes the photo the app uploads and hands it to the menu recognition
provider, mapping every failure to the app's "no_menu" answer.
"""

import base64
import binascii
import logging
import re

from allergen_api.core.exceptions import BadRequestError
from allergen_api.models.menu import MenuScanData, UploadMenuResponse
from allergen_api.services.menu_recognition import MenuRecognitionError, MenuRecognitionService

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "image/jpeg"

_DATA_URL_MIME = re.compile(r"^data:([^;,]+)")


def decode_image(image: str) -> tuple[bytes, str]:
    """
    Decode a base64 image or ``data:`` URL into bytes and a MIME type.

    Raises:
        BadRequestError: If the payload is not valid base64 or decodes to nothing
    """
    payload = image.strip()
    mime_type = DEFAULT_MIME_TYPE

    if payload.startswith("data:"):
        header, _, payload = payload.partition(",")
        found = _DATA_URL_MIME.match(header)
        if found:
            mime_type = found.group(1)

    payload = "".join(payload.split())

    try:
        image_data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise BadRequestError("Image is not valid base64") from e

    if not image_data:
        raise BadRequestError("Image is empty")

    return image_data, mime_type


class MenuScanService:
    """Turns an uploaded menu photo into menu items with allergens."""

    def __init__(self, recognizer: MenuRecognitionService):
        self.recognizer = recognizer

    async def scan(self, image: str) -> UploadMenuResponse:
        """
        Scan a menu photo.

        Returns ``success=False, reason="no_menu"`` when the provider fails
        or finds no dishes.

        Raises:
            BadRequestError: If the image cannot be decoded
        """
        image_data, mime_type = decode_image(image)

        try:
            result = await self.recognizer.extract_menu(image_data, mime_type=mime_type)
        except MenuRecognitionError as e:
            logger.warning(
                f"Menu recognition failed: {e.message}",
                extra={"error_code": e.error_code, "provider": e.provider},
            )
            return UploadMenuResponse(success=False, reason="no_menu")

        if result.is_empty:
            logger.info(
                "No menu items found in photo",
                extra={"provider": result.provider, "processing_time_ms": result.processing_time_ms},
            )
            return UploadMenuResponse(success=False, reason="no_menu")

        logger.info(
            "Menu scan complete",
            extra={
                "provider": result.provider,
                "items": len(result.menu_items),
                "processing_time_ms": result.processing_time_ms,
            },
        )
        return UploadMenuResponse(
            success=True,
            gemini=True,
            data=MenuScanData(menu_items=result.menu_items),
        )
