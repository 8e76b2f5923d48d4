"""
Data URI helpers.

Uploaded files travel to the AI flows as 'data:<mimetype>;base64,<data>'.
"""
import base64
import binascii
import re
from typing import Tuple

_DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>.*)$", re.DOTALL)


def to_data_uri(content: bytes, mime_type: str) -> str:
    """Encode raw bytes as a base64 data URI."""
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def parse_data_uri(uri: str) -> Tuple[str, bytes]:
    """
    Split a data URI into (mime_type, content).

    Raises:
        ValueError if the URI is not base64 data URI or the payload is corrupt.
    """
    match = _DATA_URI_RE.match(uri.strip())
    if not match:
        raise ValueError("Expected format: 'data:<mimetype>;base64,<encoded_data>'")
    try:
        content = base64.b64decode(match.group("data"), validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e
    return match.group("mime").lower(), content


def is_image(mime_type: str) -> bool:
    return mime_type.startswith("image/")
