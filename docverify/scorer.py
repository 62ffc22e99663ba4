import re
from typing import List, NamedTuple

from .models import VerificationVerdict

INVALID_KEYWORDS = ("invalid", "reject", "fake")
WARNING_KEYWORDS = ("warning", "concern", "issue")

_SENTENCE_SPLIT = re.compile(r"[.!?]")


class ScoreResult(NamedTuple):
    is_valid: bool
    confidence: float
    warnings: List[str]


def is_valid_analysis(analysis: str) -> bool:
    """Analysis is valid unless it uses one of the negative keywords"""
    lowered = analysis.lower()
    return not any(word in lowered for word in INVALID_KEYWORDS)


def extract_warnings(analysis: str) -> List[str]:
    """Collect the sentences that mention a warning, concern or issue, in order"""
    warnings = []
    for sentence in _SENTENCE_SPLIT.split(analysis):
        lowered = sentence.lower()
        if not any(word in lowered for word in WARNING_KEYWORDS):
            continue
        sentence = sentence.strip()
        if sentence:
            warnings.append(sentence)
    return warnings


def confidence_for(is_valid: bool, warning_count: int) -> float:
    if not is_valid:
        return 0.2
    if warning_count == 0:
        return 0.95
    if warning_count < 3:
        return 0.8
    return 0.6


def score(analysis: str) -> ScoreResult:
    """
    Derive validity, confidence and warnings from free-text model output.

    This is a keyword heuristic over the raw analysis: a benign sentence that
    happens to say "issue" still counts as a warning.
    """
    is_valid = is_valid_analysis(analysis)
    warnings = extract_warnings(analysis)
    return ScoreResult(
        is_valid=is_valid,
        confidence=confidence_for(is_valid, len(warnings)),
        warnings=warnings,
    )


def to_verdict(analysis: str) -> VerificationVerdict:
    result = score(analysis)
    return VerificationVerdict(
        is_valid=result.is_valid,
        confidence=result.confidence,
        warnings=result.warnings,
        analysis=analysis,
    )
