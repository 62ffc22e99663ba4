from typing import Union
from openai import OpenAI

from config import settings
from .errors import ClassificationError
from .logger import get_logger
from .models import DocumentCategory
from .prompts import prompt_for

logger = get_logger(__name__)

PREAMBLE = (
    "You are a document verification expert. "
    "Analyze the following document text and provide a detailed verification report. "
)

class DocumentClassifier:
    """
    Asks an OpenAI model to judge a document from its OCR text
    """

    def __init__(self, client: OpenAI = None):
        self.client = client or OpenAI(
            api_key=settings.OPENAI_API_KEY,
            timeout=settings.OPENAI_TIMEOUT_SECONDS,
            max_retries=0,
        )
        self.model = settings.OPENAI_MODEL
        self.max_tokens = settings.CLASSIFIER_MAX_TOKENS
        self.temperature = settings.CLASSIFIER_TEMPERATURE

    def build_prompt(self, text: str, category: Union[str, DocumentCategory]) -> str:
        """Combine the preamble, the category checklist and the document text"""
        return PREAMBLE + prompt_for(category) + "\n\nDocument text:\n" + text

    def classify(self, text: str, category: Union[str, DocumentCategory]) -> str:
        """Return the model's free-text analysis verbatim"""
        prompt = self.build_prompt(text, category)

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
            analysis = response.choices[0].message.content
        except Exception as e:
            logger.error("Model call failed for %s: %s", category, e)
            raise ClassificationError(f"Document verification failed: {e}") from e

        if not analysis:
            raise ClassificationError("Model returned an empty analysis")

        logger.info("Received %d characters of analysis for %s", len(analysis), category)
        return analysis
