"""Image payload helpers: upload validation and data-URI encoding."""
import base64
import io
import os
import re

from PIL import Image, UnidentifiedImageError

from coin_content import (
    MAX_UPLOAD_BYTES,
    MSG_LOAD_FAILED,
    MSG_READ_FAILED,
    MSG_TOO_LARGE,
    MSG_UNSUPPORTED_TYPE,
)
from errors import LoadError, ValidationError

_DATA_URI = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>.*)$", re.DOTALL)


def to_data_uri(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('utf-8')}"


def parse_data_uri(data_uri: str) -> tuple[str, bytes]:
    """Split a base64 data URI into (mime_type, raw bytes). Raises ValueError."""
    match = _DATA_URI.match(data_uri or "")
    if not match:
        raise ValueError("Image is not a base64 data URI.")
    return match.group("mime"), base64.b64decode(match.group("data"))


def upload_size(file) -> int:
    """Size in bytes of an uploaded file (werkzeug FileStorage or similar)."""
    if file.content_length:
        return file.content_length
    stream = file.stream
    try:
        pos = stream.tell()
        stream.seek(0, os.SEEK_END)
        size = stream.tell()
        stream.seek(pos)
    except (OSError, ValueError) as e:
        raise ValidationError(ValidationError.READ_FAILED, MSG_READ_FAILED) from e
    return size


def validate_upload(file) -> None:
    """Check MIME type and size; raises ValidationError on the first failure."""
    mime_type = file.mimetype or ""
    if not mime_type.startswith("image/"):
        raise ValidationError(ValidationError.UNSUPPORTED_TYPE, MSG_UNSUPPORTED_TYPE)
    if upload_size(file) > MAX_UPLOAD_BYTES:
        raise ValidationError(ValidationError.TOO_LARGE, MSG_TOO_LARGE)


def read_upload(file) -> str:
    """Read a validated upload and return it as a data URI."""
    try:
        file.stream.seek(0)
        data = file.read()
    except (OSError, ValueError) as e:
        raise ValidationError(ValidationError.READ_FAILED, MSG_READ_FAILED) from e
    return to_data_uri(data, file.mimetype)


def load_image_file(path: str) -> str:
    """
    Read a bundled image from disk and return it as a data URI.
    The MIME type comes from Pillow's format detection, not the file extension.
    """
    try:
        with open(path, "rb") as f:
            data = f.read()
        with Image.open(io.BytesIO(data)) as image:
            mime_type = Image.MIME.get(image.format or "")
    except (OSError, UnidentifiedImageError) as e:
        raise LoadError(MSG_LOAD_FAILED) from e
    if not mime_type:
        raise LoadError(MSG_LOAD_FAILED)
    return to_data_uri(data, mime_type)
