class DocumentVerificationError(Exception):
    """Base class for all verification service errors"""


class ExtractionError(DocumentVerificationError):
    """OCR engine failed to produce text for a document"""


class ClassificationError(DocumentVerificationError):
    """Language model call failed or returned nothing"""


class UnknownCategoryError(DocumentVerificationError):
    """Document category or upload slot is not one the pipeline knows"""


class UploadRejectedError(DocumentVerificationError):
    """Uploaded file failed size or type validation"""


class IllegalTransitionError(DocumentVerificationError):
    """Upload slot was moved to a status it cannot reach from its current one"""


class SubmissionError(DocumentVerificationError):
    """Application is not ready to be submitted"""


class ApplicationNotFoundError(DocumentVerificationError):
    """No stored application matches the given identifier"""
