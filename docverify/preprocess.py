import cv2
import numpy as np
from PIL import Image

from config import settings

class OcrPreprocessor:
    """
    Prepares page images for OCR: grayscale, optionally Otsu-binarized
    """

    def __init__(self, binarize: bool = None):
        self.binarize = settings.OCR_BINARIZE if binarize is None else binarize

    def to_gray(self, img: np.ndarray) -> np.ndarray:
        """Convert an RGB array to a single-channel grayscale array"""
        if img.ndim == 2:
            return img
        return cv2.cvtColor(img, cv2.COLOR_RGB2GRAY)

    def threshold(self, gray: np.ndarray) -> np.ndarray:
        """Binarize with Otsu's method"""
        _, binary = cv2.threshold(gray, 0, 255, cv2.THRESH_BINARY + cv2.THRESH_OTSU)
        return binary

    def prepare(self, image: Image.Image) -> Image.Image:
        gray = self.to_gray(np.array(image.convert("RGB")))
        if self.binarize:
            gray = self.threshold(gray)
        return Image.fromarray(gray)
