from typing import Any, Dict, Optional

from config import settings, ALLOWED_DOCUMENT_TYPES, ALLOWED_VIDEO_TYPES
from .errors import UploadRejectedError
from .logger import get_logger
from .models import VerificationRequest, VerificationVerdict
from .slots import DocumentSlot, SlotStatus, VideoSlot, VideoStatus, slot_label
from .verifier import DocumentVerifier

logger = get_logger(__name__)

TECHNICAL_FAILURE = VerificationVerdict(
    is_valid=False,
    confidence=0.1,
    warnings=["Verification process failed."],
    analysis="Document verification process failed due to technical issues.",
)


def validate_document_upload(content: bytes, content_type: Optional[str]) -> None:
    """Reject documents over the size limit or of an unsupported type"""
    if len(content) > settings.MAX_DOCUMENT_BYTES:
        raise UploadRejectedError("File size should be less than 5MB")
    if content_type not in ALLOWED_DOCUMENT_TYPES:
        raise UploadRejectedError("Only PDF, JPEG, PNG, and HEIC files are allowed")


def validate_video_upload(size: int, content_type: Optional[str]) -> None:
    """Reject pitch videos over the size limit or of an unsupported type"""
    if size > settings.MAX_VIDEO_BYTES:
        raise UploadRejectedError("Video size should be less than 50MB")
    if content_type not in ALLOWED_VIDEO_TYPES:
        raise UploadRejectedError("Only MP4 and MOV formats are allowed")


def is_accepted(verdict: VerificationVerdict) -> bool:
    return verdict.is_valid and verdict.confidence >= settings.ACCEPT_MIN_CONFIDENCE


def run_verification(
    slot: DocumentSlot,
    content: bytes,
    content_type: Optional[str],
    filename: Optional[str] = None,
    url: str = "",
    verifier: DocumentVerifier = None,
) -> Dict[str, Any]:
    """
    Validate, verify and record one uploaded document on its slot

    Args:
        slot: Upload slot receiving the file; its status is advanced in place
        content: Raw file bytes
        content_type: MIME type reported by the client
        filename: Original filename, used to detect PDFs
        url: Object storage URL of the file, kept for the final record
        verifier: Verifier to use, a default one is built otherwise

    Returns:
        Slot name, resulting status, url, verdict and a user-facing message
    """
    label = slot_label(slot.name)

    # Step 1: Upload validation
    slot.start(filename)
    try:
        validate_document_upload(content, content_type)
    except UploadRejectedError:
        slot.transition(SlotStatus.ERROR)
        raise

    slot.url = url
    slot.transition(SlotStatus.VERIFYING)
    logger.info("Verifying %s as %s", slot.name, slot.category.value)

    # Step 2: Verification; technical failures become a failed verdict
    verifier = verifier or DocumentVerifier()
    request = VerificationRequest(
        file_content=content,
        document_category=slot.category,
        filename=filename,
    )
    technical_failure = False
    try:
        verdict = verifier.verify(request)
    except Exception:
        logger.exception("Error verifying %s", slot.name)
        verdict = TECHNICAL_FAILURE.model_copy(deep=True)
        technical_failure = True

    # Step 3: Acceptance rule
    slot.verdict = verdict
    if is_accepted(verdict):
        slot.transition(SlotStatus.VERIFIED)
        message = f"{label} verified successfully!"
    else:
        slot.transition(SlotStatus.VERIFICATION_FAILED)
        if technical_failure:
            message = f"Failed to verify {label}. Please try again."
        elif verdict.warnings:
            message = f"{label} verification failed: {verdict.warnings[0]}"
        else:
            message = f"{label} verification failed. Please upload a valid document."

    logger.info("%s -> %s (confidence=%s)", slot.name, slot.status.value, verdict.confidence)

    return {
        "document": slot.name,
        "status": slot.status.value,
        "url": slot.url,
        "verificationResult": verdict.model_dump(by_alias=True),
        "message": message,
    }


def record_video_upload(video: VideoSlot, size: int, content_type: Optional[str], url: str) -> Dict[str, Any]:
    """Validate the pitch video and remember where it is stored"""
    video.transition(VideoStatus.VALIDATING)
    video.error = None
    try:
        validate_video_upload(size, content_type)
        if not url:
            raise UploadRejectedError("Failed to upload video. Please try again.")
    except UploadRejectedError as e:
        video.error = str(e)
        video.transition(VideoStatus.ERROR)
        raise

    video.url = url
    video.transition(VideoStatus.SUCCESS)
    logger.info("Pitch video recorded at %s", url)
    return video.to_dict()
