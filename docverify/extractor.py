from typing import Optional
import pytesseract

from config import settings
from .errors import ExtractionError
from .file_converter import convert_to_images
from .logger import get_logger
from .preprocess import OcrPreprocessor

logger = get_logger(__name__)

class TextExtractor:
    """
    Extracts raw text from uploaded document files using Tesseract OCR
    """

    def __init__(self, preprocessor: OcrPreprocessor = None):
        self.language = settings.OCR_LANGUAGE
        self.preprocessor = preprocessor or OcrPreprocessor()
        if settings.TESSERACT_CMD:
            pytesseract.pytesseract.tesseract_cmd = settings.TESSERACT_CMD

    def extract(self, content: bytes, filename: Optional[str] = None) -> str:
        """Run OCR over every page of the file and join the page texts"""
        try:
            pages = convert_to_images(content, filename)
            texts = []
            for index, page in enumerate(pages, start=1):
                prepared = self.preprocessor.prepare(page)
                text = pytesseract.image_to_string(prepared, lang=self.language)
                logger.debug("OCR page %d/%d: %d characters", index, len(pages), len(text))
                texts.append(text)
        except Exception as e:
            logger.error("OCR failed for %s: %s", filename or "<upload>", e)
            raise ExtractionError(f"OCR extraction failed: {e}") from e

        full_text = "\n".join(texts)
        logger.info("Extracted %d characters from %d page(s)", len(full_text), len(pages))
        return full_text
