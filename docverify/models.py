from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DocumentCategory(str, Enum):
    """Document types the verification pipeline understands"""

    IDENTITY_PROOF = "identityProof"
    ADDRESS_PROOF = "addressProof"
    INCOME_TAX = "incomeTax"
    BANK_STATEMENT = "bankStatement"


class VerificationRequest(BaseModel):
    """One upload attempt handed to the verifier"""

    model_config = ConfigDict(frozen=True)

    file_content: bytes
    document_category: DocumentCategory
    filename: Optional[str] = None


class VerificationVerdict(BaseModel):
    """Structured outcome of verifying a single document"""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    is_valid: bool
    confidence: float = Field(ge=0.0, le=1.0)
    warnings: List[str] = Field(default_factory=list)
    analysis: str = ""


class DocumentRecord(BaseModel):
    """Per-slot entry of the persisted application aggregate"""

    url: str = ""
    verified: bool = False
    confidence: float = 0.0
    warnings: List[str] = Field(default_factory=list)
