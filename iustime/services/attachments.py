# Rev 0.2.0
"""Task attachments are stored inline as base64 data URLs."""
from __future__ import annotations
import base64
import binascii
import mimetypes
from pathlib import Path
from typing import Tuple

from iustime.models.entities import Attachment
from iustime.repositories.entity_store import new_id, utc_now_iso

DEFAULT_MIME = "application/octet-stream"


def to_data_url(payload: bytes, mime_type: str = DEFAULT_MIME) -> str:
    return f"data:{mime_type or DEFAULT_MIME};base64,{base64.b64encode(payload).decode('ascii')}"


def decode_data_url(data: str) -> Tuple[str, bytes]:
    """'data:<mime>;base64,<b64>' -> (mime, bytes). Raises ValueError when malformed."""
    if not data.startswith("data:") or "," not in data:
        raise ValueError("not a data URL")
    header, _, body = data[5:].partition(",")
    mime, _, encoding = header.partition(";")
    if encoding != "base64":
        raise ValueError("only base64 data URLs are supported")
    try:
        return mime or DEFAULT_MIME, base64.b64decode(body, validate=True)
    except binascii.Error as e:
        raise ValueError(f"invalid base64 payload: {e}") from e


def attachment_from_file(path: Path | str) -> Attachment:
    p = Path(path)
    payload = p.read_bytes()
    mime = mimetypes.guess_type(p.name)[0] or DEFAULT_MIME
    return Attachment(
        id=new_id(),
        name=p.name,
        mime_type=mime,
        size=len(payload),
        data=to_data_url(payload, mime),
        created_at=utc_now_iso(),
    )


def human_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"
