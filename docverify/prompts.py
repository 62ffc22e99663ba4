from typing import Dict, Union

from .errors import UnknownCategoryError
from .models import DocumentCategory

VERIFICATION_PROMPTS: Dict[DocumentCategory, str] = {
    DocumentCategory.IDENTITY_PROOF: """Analyze this identity document and verify:
  1. Is it a valid government-issued ID?
  2. Are all required fields present (name, ID number, date of birth)?
  3. Check for any signs of tampering or inconsistencies.
  4. Is the document currently valid (not expired)?
  Provide a detailed analysis and list any concerns.""",

    DocumentCategory.INCOME_TAX: """Analyze this income tax return and verify:
  1. Is it a complete tax return document?
  2. Identify the assessment year and filing date
  3. Verify if income details are present and consistent
  4. Check for any red flags or inconsistencies
  Provide a detailed analysis focusing on financial credibility.""",

    DocumentCategory.ADDRESS_PROOF: """Analyze this address proof document and verify:
  1. Is it an acceptable form of address proof?
  2. Are address details complete and properly formatted?
  3. Is the document recent (within last 3 months if applicable)?
  4. Check for any inconsistencies or red flags
  Provide a detailed analysis of the document's validity.""",

    # The scorer looks for these exact words, so the model is told to use them.
    DocumentCategory.BANK_STATEMENT: """Analyze this bank statement and verify:
  1. Is it a complete bank statement?
  2. Identify the statement period and bank details
  3. Check for regular cash flows and transaction patterns
  4. Identify any suspicious transactions or irregularities
  Provide a detailed analysis focusing on financial health.

  Don't use words like invalid, reject or fake unless you find it necessary. If it's not a valid document, please use three words : 'invalid', 'reject' and 'fake' to make the code understand the invalidity.

  Output format !! :
      (this is used to calculate validity btw so keep it in mind :
      confidence = 0.95 if valid and no warnings,
      0.8 if valid and fewer than 3 warnings,
      0.6 if valid otherwise, 0.2 if not valid)
""",
}

_missing = set(DocumentCategory) - set(VERIFICATION_PROMPTS)
if _missing:
    raise RuntimeError(f"No verification prompt for: {sorted(c.value for c in _missing)}")


def parse_category(value: Union[str, DocumentCategory]) -> DocumentCategory:
    """Convert a category name into a DocumentCategory"""
    if isinstance(value, DocumentCategory):
        return value
    try:
        return DocumentCategory(value)
    except ValueError:
        raise UnknownCategoryError(f"Unknown document category: {value}") from None


def prompt_for(category: Union[str, DocumentCategory]) -> str:
    """Return the verification checklist for a document category"""
    return VERIFICATION_PROMPTS[parse_category(category)]
