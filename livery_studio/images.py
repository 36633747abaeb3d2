"""
Image payload helpers.

Callers hand images around as data URIs (data:<mime>;base64,<payload>).
Before anything crosses the wire it is decoded, checked with Pillow and
re-encoded as PNG so the service always receives one encoding.
"""

from __future__ import annotations

import base64
import binascii
import io
import re
from pathlib import Path
from typing import Tuple

from PIL import Image, UnidentifiedImageError

from .errors import ImagePayloadError

TRANSPORT_MIME = "image/png"

_DATA_URI_RE = re.compile(
    r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?:;[\w-]+=[\w.-]+)*;base64,(?P<payload>.*)$",
    re.DOTALL,
)

# Pillow keeps these modes intact when saving PNG; anything else (CMYK, YCbCr…) is converted first.
_PNG_SAFE_MODES = {"1", "L", "LA", "P", "RGB", "RGBA", "I", "I;16"}


def split_data_uri(uri: str) -> Tuple[str, bytes]:
    """Return (mime_type, raw_bytes) for a base64 data URI."""
    match = _DATA_URI_RE.match(uri.strip()) if isinstance(uri, str) else None
    if not match:
        raise ImagePayloadError("image payload is not a base64 data URI")
    try:
        data = base64.b64decode(match.group("payload"), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImagePayloadError(f"image payload is not valid base64: {e}") from e
    if not data:
        raise ImagePayloadError("image payload is empty")
    return match.group("mime") or TRANSPORT_MIME, data


def to_data_uri(data: bytes, mime_type: str = TRANSPORT_MIME) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def ensure_decodable(uri: str) -> str:
    """Validate that uri carries an image Pillow can open. Returns uri unchanged."""
    _, data = split_data_uri(uri)
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise ImagePayloadError(f"image payload could not be decoded: {e}") from e
    return uri


def normalize_to_png(data: bytes) -> bytes:
    """Re-encode any Pillow-readable image as PNG bytes."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            if img.mode not in _PNG_SAFE_MODES:
                img = img.convert("RGBA" if "A" in img.getbands() else "RGB")
            buf = io.BytesIO()
            img.save(buf, format="PNG")
    except (UnidentifiedImageError, OSError) as e:
        raise ImagePayloadError(f"image payload could not be decoded: {e}") from e
    return buf.getvalue()


def transport_bytes(uri: str) -> bytes:
    """Strip the data-URI envelope and return PNG bytes ready for upload."""
    _, data = split_data_uri(uri)
    return normalize_to_png(data)


def load_image_file(path: Path) -> str:
    """Read an image file into a data URI (mime guessed from the extension)."""
    img_bytes = Path(path).read_bytes()
    ext = Path(path).suffix.lower().lstrip(".")
    mime = f"image/{'jpeg' if ext in ('jpg', 'jpeg') else ext or 'png'}"
    return ensure_decodable(to_data_uri(img_bytes, mime))
