from enum import Enum
from typing import Dict, FrozenSet, Optional

from config import SLOT_CATEGORIES
from .errors import IllegalTransitionError, UnknownCategoryError
from .models import DocumentCategory, VerificationVerdict
from .prompts import parse_category


class SlotStatus(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    VERIFYING = "verifying"
    VERIFIED = "verified"
    VERIFICATION_FAILED = "verification-failed"
    ERROR = "error"


class VideoStatus(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SUCCESS = "success"
    ERROR = "error"


# A finished slot only goes back to validating when a new file arrives
SLOT_TRANSITIONS: Dict[SlotStatus, FrozenSet[SlotStatus]] = {
    SlotStatus.IDLE: frozenset({SlotStatus.VALIDATING}),
    SlotStatus.VALIDATING: frozenset({SlotStatus.VERIFYING, SlotStatus.ERROR}),
    SlotStatus.VERIFYING: frozenset({
        SlotStatus.VERIFIED, SlotStatus.VERIFICATION_FAILED, SlotStatus.ERROR,
    }),
    SlotStatus.VERIFIED: frozenset({SlotStatus.VALIDATING}),
    SlotStatus.VERIFICATION_FAILED: frozenset({SlotStatus.VALIDATING}),
    SlotStatus.ERROR: frozenset({SlotStatus.VALIDATING}),
}

VIDEO_TRANSITIONS: Dict[VideoStatus, FrozenSet[VideoStatus]] = {
    VideoStatus.IDLE: frozenset({VideoStatus.VALIDATING}),
    VideoStatus.VALIDATING: frozenset({VideoStatus.SUCCESS, VideoStatus.ERROR}),
    VideoStatus.SUCCESS: frozenset({VideoStatus.VALIDATING}),
    VideoStatus.ERROR: frozenset({VideoStatus.VALIDATING}),
}


def category_for_slot(slot_name: str) -> DocumentCategory:
    """Map an upload slot name to its verification category"""
    if slot_name not in SLOT_CATEGORIES:
        raise UnknownCategoryError(f"Unknown document type: {slot_name}")
    return parse_category(SLOT_CATEGORIES[slot_name])


def slot_label(slot_name: str) -> str:
    """Human readable slot name, e.g. identityProof -> identity Proof"""
    return "".join(f" {c}" if c.isupper() else c for c in slot_name).strip()


class DocumentSlot:
    """
    Upload position for one document of an application
    """

    def __init__(self, name: str):
        self.name = name
        self.category = category_for_slot(name)
        self.status = SlotStatus.IDLE
        self.url = ""
        self.filename: Optional[str] = None
        self.verdict: Optional[VerificationVerdict] = None

    def transition(self, new_status: SlotStatus) -> None:
        if new_status not in SLOT_TRANSITIONS[self.status]:
            raise IllegalTransitionError(
                f"{self.name}: cannot move from {self.status.value} to {new_status.value}"
            )
        self.status = new_status

    def start(self, filename: Optional[str] = None) -> None:
        """Begin processing a new file; clears the previous outcome"""
        self.transition(SlotStatus.VALIDATING)
        self.filename = filename
        self.url = ""
        self.verdict = None

    @property
    def is_verified(self) -> bool:
        return self.status == SlotStatus.VERIFIED

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "url": self.url,
            "filename": self.filename,
            "verificationResult": (
                self.verdict.model_dump(by_alias=True) if self.verdict else None
            ),
        }


class VideoSlot:
    """
    Pitch video upload; the file itself lives in object storage
    """

    def __init__(self):
        self.status = VideoStatus.IDLE
        self.url = ""
        self.error: Optional[str] = None

    def transition(self, new_status: VideoStatus) -> None:
        if new_status not in VIDEO_TRANSITIONS[self.status]:
            raise IllegalTransitionError(
                f"video: cannot move from {self.status.value} to {new_status.value}"
            )
        self.status = new_status

    def to_dict(self) -> dict:
        return {"status": self.status.value, "url": self.url, "error": self.error}
