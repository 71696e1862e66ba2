from pathlib import Path
import uuid

from fastapi import UploadFile

from approveflow.core.config import settings

ALLOWED_IMAGE_TYPES = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


class UnsupportedAssetError(ValueError):
    pass


def read_upload(file: UploadFile) -> bytes:
    """Read an upload, stopping one byte past the size limit so oversize bodies are never fully buffered."""
    return file.file.read(settings.MAX_UPLOAD_BYTES + 1)


def ensure_dirs() -> None:
    Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)


def check_asset(content_type: str | None, size: int) -> str:
    """Return the file suffix for an acceptable image upload."""
    if content_type not in ALLOWED_IMAGE_TYPES:
        raise UnsupportedAssetError(f"Unsupported asset type: {content_type}")
    if size == 0:
        raise UnsupportedAssetError("Empty upload")
    if size > settings.MAX_UPLOAD_BYTES:
        raise UnsupportedAssetError(f"Asset exceeds {settings.MAX_UPLOAD_BYTES} bytes")
    return ALLOWED_IMAGE_TYPES[content_type]


def save_asset(data: bytes, content_type: str | None, upload_dir: str | None = None) -> str:
    """Store an uploaded image and return its public path (the project's imageUrl)."""
    suffix = check_asset(content_type, len(data))
    root = Path(upload_dir or settings.UPLOAD_DIR)
    root.mkdir(parents=True, exist_ok=True)
    name = f"{uuid.uuid4().hex}{suffix}"
    (root / name).write_bytes(data)
    return f"/uploads/{name}"
