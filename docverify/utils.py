import mimetypes
import os
import requests
from typing import BinaryIO, Optional, Tuple
from urllib.parse import urlparse

from config import settings
from .errors import UploadRejectedError

mimetypes.add_type("image/heic", ".heic")

DOWNLOAD_CHUNK_SIZE = 64 * 1024

def read_limited(fileobj: BinaryIO, limit: int) -> bytes:
    """Read at most limit + 1 bytes, enough to tell an oversized upload apart"""
    return fileobj.read(limit + 1)

def download_file(url: str, timeout: float = None, limit: int = None) -> Tuple[bytes, Optional[str]]:
    """
    Download a stored document from its object storage URL

    Args:
        url: Public URL returned by the storage service
        timeout: Request timeout in seconds, defaults to settings
        limit: Maximum accepted size in bytes, defaults to MAX_DOCUMENT_BYTES

    Returns:
        File bytes (at most limit + 1 of them) and the content type reported by the server
    """
    limit = limit or settings.MAX_DOCUMENT_BYTES
    if not is_valid_url(url):
        raise UploadRejectedError(f"Invalid file URL: {url}")

    try:
        with requests.get(url, timeout=timeout or settings.DOWNLOAD_TIMEOUT_SECONDS, stream=True) as response:
            response.raise_for_status()
            content_type = response.headers.get("Content-Type")
            content = bytearray()
            for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                content.extend(chunk)
                # Stop once the file is known to be over the limit
                if len(content) > limit:
                    break
    except requests.RequestException as e:
        raise UploadRejectedError(f"Failed to download file from {url}: {e}") from e

    if content_type:
        content_type = content_type.split(";")[0].strip()
    return bytes(content[: limit + 1]), content_type

def is_valid_url(url: str) -> bool:
    """Check if string is a valid http(s) URL"""
    try:
        result = urlparse(url)
    except ValueError:
        return False
    return result.scheme in ("http", "https") and bool(result.netloc)

def filename_from_url(url: str) -> str:
    return os.path.basename(urlparse(url).path)

def guess_content_type(filename: Optional[str], reported: Optional[str] = None) -> Optional[str]:
    """Prefer the reported content type, otherwise guess from the filename"""
    if reported and reported != "application/octet-stream":
        return reported
    if not filename:
        return reported
    guessed, _ = mimetypes.guess_type(filename)
    return guessed or reported
