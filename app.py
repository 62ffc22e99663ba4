from fastapi import Depends, FastAPI, File, UploadFile, Form, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from typing import Optional, Dict, Any, List

from config import settings, DEFAULT_TAGS
from docverify.applications import (
    InMemoryApplicationStore,
    SessionRegistry,
    submit_application,
)
from docverify.errors import (
    ApplicationNotFoundError,
    ClassificationError,
    DocumentVerificationError,
    ExtractionError,
    IllegalTransitionError,
    SubmissionError,
    UnknownCategoryError,
    UploadRejectedError,
)
from docverify.logger import get_logger
from docverify.models import VerificationRequest
from docverify.prompts import parse_category
from docverify.run_pipeline import (
    record_video_upload,
    run_verification,
    validate_document_upload,
)
from docverify.utils import download_file, filename_from_url, guess_content_type, read_limited
from docverify.verifier import DocumentVerifier

logger = get_logger("docverify.api")

app = FastAPI(
    title="Loan Application Document Verification Service",
    description="OCR and AI-powered verification of loan application documents",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

store = InMemoryApplicationStore()
sessions = SessionRegistry(store)

_verifier: Optional[DocumentVerifier] = None


def get_verifier() -> DocumentVerifier:
    global _verifier
    if _verifier is None:
        _verifier = DocumentVerifier()
    return _verifier


def to_http_error(e: DocumentVerificationError) -> HTTPException:
    """Map pipeline errors to HTTP status codes"""
    logger.warning("Request failed: %s: %s", type(e).__name__, e)
    if isinstance(e, (UnknownCategoryError, ApplicationNotFoundError)):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, (UploadRejectedError, SubmissionError, IllegalTransitionError)):
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, (ExtractionError, ClassificationError)):
        return HTTPException(status_code=502, detail=f"Document verification failed: {e}")
    return HTTPException(status_code=500, detail=str(e))


# ------------------------
# Stateless verification
# ------------------------
@app.post("/verify")
def verify_document(
    file: UploadFile = File(...),
    category: str = Form(...),
    verifier: DocumentVerifier = Depends(get_verifier),
):
    """
    Verify a single document against one of the four categories.
    Supports JPG / PNG / HEIC / PDF uploads up to 5MB.
    """
    try:
        document_category = parse_category(category)
        content = read_limited(file.file, settings.MAX_DOCUMENT_BYTES)
        content_type = guess_content_type(file.filename, file.content_type)
        validate_document_upload(content, content_type)

        verdict = verifier.verify(VerificationRequest(
            file_content=content,
            document_category=document_category,
            filename=file.filename,
        ))
        return verdict.model_dump(by_alias=True)

    except DocumentVerificationError as e:
        raise to_http_error(e)


# ------------------------
# Application intake
# ------------------------
@app.post("/applications/{application_id}", status_code=201)
def create_application(application_id: str):
    if store.get(application_id) is not None:
        raise HTTPException(status_code=409, detail="Application already exists")
    return store.create(application_id, {})


@app.get("/applications/{application_id}")
def get_application(application_id: str):
    try:
        return sessions.get(application_id).to_dict()
    except DocumentVerificationError as e:
        raise to_http_error(e)


@app.post("/applications/{application_id}/documents/{slot_name}")
def upload_document(
    application_id: str,
    slot_name: str,
    file: UploadFile = File(...),
    url: str = Form(""),
    verifier: DocumentVerifier = Depends(get_verifier),
) -> Dict[str, Any]:
    """
    Verify an uploaded document for one slot of an application.
    `url` is where the client stored the file in object storage.
    """
    try:
        slot = sessions.get(application_id).slot(slot_name)
        content = read_limited(file.file, settings.MAX_DOCUMENT_BYTES)
        return run_verification(
            slot,
            content=content,
            content_type=guess_content_type(file.filename, file.content_type),
            filename=file.filename,
            url=url,
            verifier=verifier,
        )
    except DocumentVerificationError as e:
        raise to_http_error(e)


@app.post("/applications/{application_id}/documents/{slot_name}/from-url")
def verify_stored_document(
    application_id: str,
    slot_name: str,
    url: str = Form(...),
    verifier: DocumentVerifier = Depends(get_verifier),
) -> Dict[str, Any]:
    """Fetch a document from object storage and verify it for one slot"""
    try:
        slot = sessions.get(application_id).slot(slot_name)
        content, reported_type = download_file(url)
        filename = filename_from_url(url)
        return run_verification(
            slot,
            content=content,
            content_type=guess_content_type(filename, reported_type),
            filename=filename,
            url=url,
            verifier=verifier,
        )
    except DocumentVerificationError as e:
        raise to_http_error(e)


@app.post("/applications/{application_id}/video")
def upload_video(
    application_id: str,
    video: UploadFile = File(...),
    url: str = Form(...),
):
    """Record the pitch video (MP4 / MOV, up to 50MB)"""
    try:
        session = sessions.get(application_id)
        size = len(read_limited(video.file, settings.MAX_VIDEO_BYTES))
        return record_video_upload(
            session.video,
            size=size,
            content_type=guess_content_type(video.filename, video.content_type),
            url=url,
        )
    except DocumentVerificationError as e:
        raise to_http_error(e)


@app.put("/applications/{application_id}/tags")
def set_tags(application_id: str, tags: List[str]):
    try:
        session = sessions.get(application_id)
        return {"tags": session.set_tags(tags), "availableTags": session.available_tags()}
    except DocumentVerificationError as e:
        raise to_http_error(e)


@app.post("/applications/{application_id}/submit")
def submit(application_id: str):
    try:
        session = sessions.get(application_id)
        record = submit_application(session, store)
    except DocumentVerificationError as e:
        raise to_http_error(e)

    sessions.discard(application_id)
    return record


@app.get("/tags")
def list_tags():
    return {"tags": DEFAULT_TAGS}


# ------------------------
# Health Check
# ------------------------
@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "service": "document-verification"
    }


# ------------------------
# Local Dev Entry
# ------------------------
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
