import io
import os

# Settings require an API key at import time
os.environ.setdefault("OPENAI_API_KEY", "test-key")

import pytest
from PIL import Image

from docverify.errors import ExtractionError


LONG_TEXT = (
    "Republic of Examplestan national identity card. Name: Jane Doe. "
    "ID number: 1234-5678-9012. Date of birth: 01-01-1990. Expires: 01-01-2030."
)

TAX_TEXT = (
    "Form ITR-1 income tax return for assessment year 2023-24. Gross total income "
    "1,200,000. Tax paid 150,000. Filed on 31-07-2023 by the assessee."
)


class FakeExtractor:
    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.calls = []

    def extract(self, content, filename=None):
        self.calls.append((content, filename))
        if self.error:
            raise self.error
        return self.text


class FakeClassifier:
    def __init__(self, analysis="", error=None):
        self.analysis = analysis
        self.error = error
        self.calls = []

    def classify(self, text, category):
        self.calls.append((text, category))
        if self.error:
            raise self.error
        return self.analysis


@pytest.fixture
def png_bytes():
    buffer = io.BytesIO()
    Image.new("RGB", (64, 32), color=(255, 255, 255)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def fake_extractor():
    return FakeExtractor(text=LONG_TEXT)


@pytest.fixture
def failing_extractor():
    return FakeExtractor(error=ExtractionError("OCR extraction failed: engine crashed"))
