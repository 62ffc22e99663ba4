from config import settings
from .classifier import DocumentClassifier
from .extractor import TextExtractor
from .logger import get_logger
from .models import DocumentCategory, VerificationRequest, VerificationVerdict
from .scorer import to_verdict

logger = get_logger(__name__)

TEXT_TOO_SHORT = VerificationVerdict(
    is_valid=False,
    confidence=0.1,
    analysis="The extracted text is too short or irrelevant to be verified.",
    warnings=["Text extraction failed, or the document is too irrelevant for verification."],
)

INCOMPLETE_DOCUMENT = VerificationVerdict(
    is_valid=False,
    confidence=0.3,
    analysis="The document is incomplete or cannot be verified properly.",
    warnings=["Document content is incomplete."],
)

NOT_INCOME_TAX_RETURN = VerificationVerdict(
    is_valid=False,
    confidence=0.2,
    analysis="The document does not appear to be a valid income tax return.",
    warnings=["Missing key terms like 'income' or 'tax return'."],
)

INCOMPLETE_PHRASE = "not a complete document"
INCOME_TAX_TERMS = ("income", "tax return")


class DocumentVerifier:
    """
    Runs a single document through OCR, model classification and scoring

    Rules:
    - too little OCR text -> invalid (0.1), model is not called
    - model says "not a complete document" on a valid verdict -> invalid (0.3)
    - income tax return without "income" or "tax return" in its text -> invalid (0.2)

    Extraction and classification errors are not caught here.
    """

    def __init__(self, extractor: TextExtractor = None, classifier: DocumentClassifier = None):
        self.extractor = extractor or TextExtractor()
        self.classifier = classifier or DocumentClassifier()
        self.min_text_length = settings.MIN_TEXT_LENGTH

    def verify(self, request: VerificationRequest) -> VerificationVerdict:
        category = request.document_category

        # Step 1: OCR
        text = self.extractor.extract(request.file_content, request.filename)
        if not text or len(text) < self.min_text_length:
            logger.info("%s: extracted text too short (%d chars)", category.value, len(text or ""))
            return TEXT_TOO_SHORT.model_copy(deep=True)

        # Step 2: Model analysis + keyword scoring
        analysis = self.classifier.classify(text, category)
        verdict = to_verdict(analysis)
        logger.info(
            "%s: base verdict valid=%s confidence=%s warnings=%d",
            category.value, verdict.is_valid, verdict.confidence, len(verdict.warnings),
        )

        # Step 3: Incomplete document override
        if verdict.is_valid and INCOMPLETE_PHRASE in verdict.analysis.lower():
            logger.info("%s: overridden as incomplete document", category.value)
            return INCOMPLETE_DOCUMENT.model_copy(deep=True)

        # Step 4: Income tax key terms
        if category == DocumentCategory.INCOME_TAX and not any(term in text for term in INCOME_TAX_TERMS):
            logger.info("%s: key terms missing from extracted text", category.value)
            return NOT_INCOME_TAX_RETURN.model_copy(deep=True)

        return verdict
