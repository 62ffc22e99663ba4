import numpy as np
import pytest
from PIL import Image

from docverify import extractor as extractor_module
from docverify import file_converter
from docverify.errors import ExtractionError
from docverify.extractor import TextExtractor
from docverify.preprocess import OcrPreprocessor


def test_extract_runs_ocr_in_english(monkeypatch, png_bytes):
    calls = []

    def fake_ocr(image, lang=None):
        calls.append((image, lang))
        return "Recognized text"

    monkeypatch.setattr(extractor_module.pytesseract, "image_to_string", fake_ocr)

    text = TextExtractor().extract(png_bytes, "scan.png")

    assert text == "Recognized text"
    assert len(calls) == 1
    image, lang = calls[0]
    assert lang == "eng"
    assert image.mode == "L"


def test_pdf_pages_are_joined_with_newlines(monkeypatch):
    pages = [Image.new("RGB", (20, 20), "white") for _ in range(3)]
    monkeypatch.setattr(file_converter, "convert_from_bytes", lambda content, dpi: pages)
    outputs = iter(["page one", "page two", "page three"])
    monkeypatch.setattr(
        extractor_module.pytesseract, "image_to_string", lambda image, lang=None: next(outputs)
    )

    text = TextExtractor().extract(b"%PDF-1.4 fake", "statement.pdf")

    assert text == "page one\npage two\npage three"


def test_ocr_engine_failure_becomes_extraction_error(monkeypatch, png_bytes):
    def broken_ocr(image, lang=None):
        raise RuntimeError("tesseract is not installed")

    monkeypatch.setattr(extractor_module.pytesseract, "image_to_string", broken_ocr)

    with pytest.raises(ExtractionError) as excinfo:
        TextExtractor().extract(png_bytes, "scan.png")

    assert isinstance(excinfo.value.__cause__, RuntimeError)


def test_unreadable_file_becomes_extraction_error():
    with pytest.raises(ExtractionError):
        TextExtractor().extract(b"not an image at all", "scan.png")


def test_unsupported_extension_becomes_extraction_error(png_bytes):
    with pytest.raises(ExtractionError):
        TextExtractor().extract(png_bytes, "notes.docx")


def test_pdf_detected_by_signature_without_filename():
    assert file_converter.is_pdf(b"%PDF-1.7 ...") is True
    assert file_converter.is_pdf(b"\x89PNG....") is False
    assert file_converter.is_pdf(b"anything", "upload.PDF") is True


def test_preprocessor_binarizes_when_enabled():
    gradient = np.tile(np.arange(0, 256, dtype=np.uint8), (10, 1))
    image = Image.fromarray(np.stack([gradient] * 3, axis=-1))

    gray = OcrPreprocessor(binarize=False).prepare(image)
    binary = OcrPreprocessor(binarize=True).prepare(image)

    assert gray.mode == "L"
    assert len(np.unique(np.array(gray))) > 2
    assert set(np.unique(np.array(binary))) <= {0, 255}
