import copy
import threading
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol

from config import SLOT_CATEGORIES, DEFAULT_TAGS
from .errors import ApplicationNotFoundError, SubmissionError
from .logger import get_logger
from .models import DocumentRecord
from .slots import DocumentSlot, VideoSlot, VideoStatus, category_for_slot

logger = get_logger(__name__)


class ApplicationStore(Protocol):
    """Keyed record store holding application aggregates"""

    def get(self, application_id: str) -> Optional[Dict[str, Any]]: ...

    def create(self, application_id: str, data: Dict[str, Any]) -> Dict[str, Any]: ...

    def update(self, application_id: str, fields: Dict[str, Any]) -> Dict[str, Any]: ...


class InMemoryApplicationStore:
    """
    Process-local ApplicationStore; update() merges top-level fields
    """

    def __init__(self):
        self._records: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()

    def get(self, application_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            record = self._records.get(application_id)
            return copy.deepcopy(record) if record is not None else None

    def create(self, application_id: str, data: Dict[str, Any] = None) -> Dict[str, Any]:
        with self._lock:
            record = {"id": application_id}
            record.update(data or {})
            self._records[application_id] = record
            return copy.deepcopy(record)

    def update(self, application_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        with self._lock:
            if application_id not in self._records:
                raise ApplicationNotFoundError("Application not found")
            self._records[application_id].update(copy.deepcopy(fields))
            return copy.deepcopy(self._records[application_id])


class ApplicationSession:
    """
    Upload state for one loan application: document slots, pitch video and tags
    """

    def __init__(self, application_id: str):
        self.application_id = application_id
        self.documents: Dict[str, DocumentSlot] = {
            name: DocumentSlot(name) for name in SLOT_CATEGORIES
        }
        self.video = VideoSlot()
        self.tags: List[str] = []

    def slot(self, name: str) -> DocumentSlot:
        category_for_slot(name)
        return self.documents[name]

    def _clean_tag(self, tag: str) -> str:
        tag = (tag or "").strip()
        if not tag:
            raise SubmissionError("Tag cannot be empty")
        return tag

    def select_tag(self, tag: str) -> List[str]:
        tag = self._clean_tag(tag)
        if tag not in self.tags:
            self.tags.append(tag)
        return self.tags

    def remove_tag(self, tag: str) -> List[str]:
        self.tags = [t for t in self.tags if t != tag]
        return self.tags

    def set_tags(self, tags: List[str]) -> List[str]:
        """Replace the selection; nothing changes if any tag is rejected"""
        selected = []
        for tag in tags:
            tag = self._clean_tag(tag)
            if tag not in selected:
                selected.append(tag)
        self.tags = selected
        return self.tags

    def available_tags(self) -> List[str]:
        return [t for t in DEFAULT_TAGS if t not in self.tags]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "applicationId": self.application_id,
            "documents": {name: slot.to_dict() for name, slot in self.documents.items()},
            "video": self.video.to_dict(),
            "tags": list(self.tags),
            "availableTags": self.available_tags(),
        }


def build_document_records(session: ApplicationSession) -> Dict[str, DocumentRecord]:
    """Per-slot records as they are persisted on submission"""
    records = {}
    for name, slot in session.documents.items():
        verdict = slot.verdict
        records[name] = DocumentRecord(
            url=slot.url,
            verified=slot.is_verified,
            confidence=verdict.confidence if verdict else 0.0,
            warnings=list(verdict.warnings) if verdict else [],
        )
    return records


def submit_application(session: ApplicationSession, store: ApplicationStore) -> Dict[str, Any]:
    """
    Persist the verified documents, video link and tags of an application

    Rules:
    - every document slot must be verified
    - the pitch video must be uploaded
    - at least one tag must be selected
    """
    if not all(slot.is_verified for slot in session.documents.values()):
        raise SubmissionError("Please ensure all documents are verified")
    if session.video.status != VideoStatus.SUCCESS:
        raise SubmissionError("Please upload a pitch video")
    if not session.tags:
        raise SubmissionError("Please select at least one tag")

    if store.get(session.application_id) is None:
        raise ApplicationNotFoundError("Application not found")

    fields = {
        "documents": {
            name: record.model_dump() for name, record in build_document_records(session).items()
        },
        "videoLink": session.video.url,
        "tags": list(session.tags),
        "verificationCompleted": True,
        "verificationDate": datetime.now(timezone.utc).isoformat(),
    }
    updated = store.update(session.application_id, fields)
    logger.info("Application %s submitted", session.application_id)
    return updated


class SessionRegistry:
    """
    Live upload sessions keyed by application id
    """

    def __init__(self, store: ApplicationStore):
        self.store = store
        self._sessions: Dict[str, ApplicationSession] = {}
        self._lock = threading.Lock()

    def get(self, application_id: str) -> ApplicationSession:
        """Return the session of a stored application, opening it on first use"""
        with self._lock:
            session = self._sessions.get(application_id)
            if session is None:
                if self.store.get(application_id) is None:
                    raise ApplicationNotFoundError("Application not found")
                session = ApplicationSession(application_id)
                self._sessions[application_id] = session
            return session

    def discard(self, application_id: str) -> None:
        with self._lock:
            self._sessions.pop(application_id, None)
