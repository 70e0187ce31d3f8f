"""Base64 payload decoding and image format sniffing.

The decoder never trusts a file name or hint: Pillow identifies the
format from the decoded bytes' own signature.
"""

from __future__ import annotations

import base64
import binascii
import io

from PIL import Image

from core.constants import DETECTED_FORMAT_ALIASES
from core.errors import DecodeError
from core.types import DecodedImage

INVALID_BASE64_REASON = "invalid base64"
INVALID_IMAGE_REASON = "unrecognized or corrupt image data"


def decode_payload(payload: str) -> DecodedImage:
    """Decode a base64 payload into a fully loaded image.

    Args:
        payload: Standard-alphabet base64 text with padding.

    Returns:
        Decoded image and its detected lowercase format name.

    Raises:
        DecodeError: If the payload is not base64 or not a supported image.
    """
    image_bytes = decode_base64(payload)
    return decode_image_bytes(image_bytes)


def decode_base64(payload: str) -> bytes:
    """Strictly decode standard base64 text into raw bytes."""
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as error:
        raise DecodeError(INVALID_BASE64_REASON, str(error)) from error


def decode_image_bytes(image_bytes: bytes) -> DecodedImage:
    """Sniff and decode raw image bytes.

    Args:
        image_bytes: Encoded image file contents.

    Returns:
        Loaded image with its detected format.

    Raises:
        DecodeError: If no Pillow codec can parse the bytes.
    """
    try:
        image = Image.open(io.BytesIO(image_bytes))
        image.load()
    except (OSError, ValueError, SyntaxError, EOFError, Image.DecompressionBombError) as error:
        raise DecodeError(INVALID_IMAGE_REASON, str(error)) from error
    return DecodedImage(pixels=image, detected_format=_normalize_format(image.format))


def _normalize_format(pil_format: str | None) -> str:
    """Map a Pillow format name onto the lowercase routing key."""
    detected_format = (pil_format or "unknown").lower()
    return DETECTED_FORMAT_ALIASES.get(detected_format, detected_format)
