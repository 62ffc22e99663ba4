from pydantic_settings import BaseSettings
from typing import Dict, List, Optional

class Settings(BaseSettings):
    # OpenAI Configuration
    OPENAI_API_KEY: str
    OPENAI_MODEL: str = "gpt-4.1-mini"
    # Request timeout handed to the OpenAI client; the pipeline itself never times out
    OPENAI_TIMEOUT_SECONDS: float = 60.0
    CLASSIFIER_MAX_TOKENS: int = 1200
    CLASSIFIER_TEMPERATURE: float = 0.0

    # OCR Configuration
    OCR_LANGUAGE: str = "eng"
    # Path to the tesseract binary when it is not on PATH
    TESSERACT_CMD: Optional[str] = None
    PDF_DPI: int = 300
    OCR_BINARIZE: bool = False

    # Verification Rules
    MIN_TEXT_LENGTH: int = 100
    ACCEPT_MIN_CONFIDENCE: float = 0.6

    # Upload Limits
    MAX_DOCUMENT_BYTES: int = 5 * 1024 * 1024
    MAX_VIDEO_BYTES: int = 50 * 1024 * 1024
    DOWNLOAD_TIMEOUT_SECONDS: float = 30.0

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"

settings = Settings()

# Upload slot -> verification category
SLOT_CATEGORIES: Dict[str, str] = {
    "identityProof": "identityProof",
    "bankStatements": "bankStatement",
    "taxReturns": "incomeTax",
    "addressProof": "addressProof",
}

ALLOWED_DOCUMENT_TYPES = {"application/pdf", "image/jpeg", "image/png", "image/heic"}
ALLOWED_VIDEO_TYPES = {"video/mp4", "video/quicktime"}

DEFAULT_TAGS: List[str] = [
    "Technology",
    "Manufacturing",
    "Healthcare",
    "Agribusiness",
    "Renewable-Energy",
    "Education",
    "E-commerce",
    "Infrastructure",
    "Financial-Services",
    "Consumer-Goods",
    "Artisanal-and-Handicrafts",
    "Sustainable-and-Social-Enterprises",
    "Green Buildings",
    "Sustainable Agriculture",
    "Sustainable Forestry",
    "Green Transportation",
    "Waste Management",
    "Recycling",
]
