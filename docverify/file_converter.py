import io
import os
from typing import List, Optional
from PIL import Image
import pillow_heif
from pdf2image import convert_from_bytes

from config import settings

pillow_heif.register_heif_opener()

SUPPORTED_IMAGE_EXTS = {".jpg", ".jpeg", ".png", ".heic"}
PDF_EXT = ".pdf"
PDF_MAGIC = b"%PDF"


def is_pdf(content: bytes, filename: Optional[str] = None) -> bool:
    """Detect PDFs by extension, falling back to the file signature"""
    if filename and os.path.splitext(filename)[1].lower() == PDF_EXT:
        return True
    return content[:4] == PDF_MAGIC


def convert_to_images(content: bytes, filename: Optional[str] = None) -> List[Image.Image]:
    """
    Converts uploaded file bytes (image / HEIC / PDF) into RGB page images.
    Returns one image per page.
    """
    ext = os.path.splitext(filename)[1].lower() if filename else ""

    # -------- Case 1: PDF --------
    if is_pdf(content, filename):
        pages = convert_from_bytes(content, dpi=settings.PDF_DPI)
        return [page.convert("RGB") for page in pages]

    # -------- Case 2: Normal image or HEIC --------
    if ext and ext not in SUPPORTED_IMAGE_EXTS:
        raise ValueError(f"Unsupported file type: {ext}")

    img = Image.open(io.BytesIO(content))
    img.load()
    return [img.convert("RGB")]
