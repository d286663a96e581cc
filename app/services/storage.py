"""
Cloudflare R2 file operations — upload, delete, text extraction for CVs.
"""
import logging
import secrets
import time
from typing import Dict
from urllib.parse import urlparse

from app.config import R2_BUCKET_NAME, R2_PUBLIC_URL, UPLOAD_FOLDER
from app.errors import StorageError
from app.extensions import r2_client

logger = logging.getLogger('services.storage')


def extract_text(filename: str, data: bytes, content_type: str) -> str:
    """Plain-text files are decoded; other formats get a placeholder naming the file."""
    if content_type and content_type.startswith('text/'):
        return data.decode('utf-8', errors='replace')
    return f"Fichier {filename} - Type non supporté pour l'extraction de contenu"


def _object_key(filename: str, folder: str) -> str:
    ext = filename.rsplit('.', 1)[-1].lower() if '.' in filename else 'bin'
    return f"{folder}/{int(time.time() * 1000)}-{secrets.token_hex(6)}.{ext}"


def upload_file(filename: str, data: bytes, content_type: str = 'application/octet-stream',
                folder: str = UPLOAD_FOLDER) -> Dict:
    """Upload to R2 under a generated unique key. Returns {url, path, content}."""
    if not r2_client:
        raise StorageError("File storage is not configured")

    key = _object_key(filename, folder)
    logger.info("Uploading %s as %s (%d bytes)", filename, key, len(data))
    try:
        r2_client.put_object(
            Bucket=R2_BUCKET_NAME, Key=key,
            Body=data, ContentType=content_type,
            CacheControl='max-age=3600',
        )
    except Exception as e:
        logger.error("Upload error for %s: %s", key, e)
        raise StorageError(f"Upload failed: {e}") from e

    return {
        'url': f"{R2_PUBLIC_URL}/{key}",
        'path': key,
        'content': extract_text(filename, data, content_type),
    }


def delete_file(path: str) -> None:
    if not r2_client:
        raise StorageError("File storage is not configured")
    try:
        r2_client.delete_object(Bucket=R2_BUCKET_NAME, Key=path)
    except Exception as e:
        logger.error("Delete error for %s: %s", path, e)
        raise StorageError(f"Delete failed: {e}") from e
    logger.info("File deleted: %s", path)


def path_from_url(url: str) -> str:
    """Storage path from a public URL — the last two segments, e.g. "cvs/abc.pdf"."""
    segments = [s for s in urlparse(url or '').path.split('/') if s]
    return '/'.join(segments[-2:])
