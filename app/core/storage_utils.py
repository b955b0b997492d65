# app/core/storage_utils.py
import uuid

from app.core.config import get_settings
from app.core.supabase_client import supabase_admin

settings = get_settings()

MAX_IMAGE_BYTES = 5 * 1024 * 1024  # 5MB per image

ALLOWED_IMAGE_CONTENT_TYPES: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


def upload_to_storage(path: str, file_bytes: bytes, content_type: str) -> str:
    """
    Upload raw bytes to the blob store and return the stored object path.

    If a file already exists at this path, it will be overwritten
    thanks to the 'upsert' option. Callers persist the returned path,
    never the bytes.

    Args:
        path: Full object path inside the bucket.
              Example: "sellers/<uid>/card.png"
        file_bytes: File content in bytes.
        content_type: MIME type recorded with the object.
    """
    bucket = supabase_admin().storage.from_(settings.STORAGE_BUCKET)
    bucket.upload(path, file_bytes, {"upsert": "true", "content-type": content_type})
    return path


def generate_filename(ext: str) -> str:
    """
    Generate a random filename using UUID4.

    Args:
        ext: File extension without dot (e.g. "png", "jpg")

    Returns:
        A filename like "<uuid4>.png"
    """
    return f"{uuid.uuid4()}.{ext}"


def image_extension(content_type: str, file_bytes: bytes) -> str:
    """
    Validate an uploaded image and return the extension to store it under.

    Raises:
        ValueError: unsupported type or too large.
    """
    if content_type not in ALLOWED_IMAGE_CONTENT_TYPES:
        raise ValueError("Unsupported image type. Allowed: JPEG, PNG, WEBP.")
    if len(file_bytes) > MAX_IMAGE_BYTES:
        raise ValueError("Image too large (max 5MB).")
    return ALLOWED_IMAGE_CONTENT_TYPES[content_type]
