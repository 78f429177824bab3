"""Helpers to turn uploaded design images into model content parts."""

import re
from typing import Any, Dict, Optional

_DATA_URL_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?:;[^,]*)?,(?P<data>.*)$", re.DOTALL)


def split_data_url(image_base64: str, default_mime_type: str = "image/png") -> tuple[str, str]:
    """
    Split an uploaded image into (mime_type, base64_payload).

    Browsers send `data:image/png;base64,....`; a bare base64 string is
    accepted too and typed with default_mime_type.
    """
    value = image_base64.strip()
    match = _DATA_URL_RE.match(value)
    if match:
        return match.group("mime") or default_mime_type, match.group("data")
    return default_mime_type, value


def build_image_part(
    image_base64: Optional[str], default_mime_type: str = "image/png"
) -> Optional[Dict[str, Any]]:
    """Build an image content part, or None when no image was supplied."""
    if not image_base64:
        return None

    mime_type, data = split_data_url(image_base64, default_mime_type)
    if not data:
        return None

    return {
        "type": "image_url",
        "image_url": {"url": f"data:{mime_type};base64,{data}"},
    }
