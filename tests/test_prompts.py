import pytest

from docverify.errors import UnknownCategoryError
from docverify.models import DocumentCategory
from docverify.prompts import VERIFICATION_PROMPTS, parse_category, prompt_for


def test_every_category_has_a_prompt():
    assert set(VERIFICATION_PROMPTS) == set(DocumentCategory)
    assert len(VERIFICATION_PROMPTS) == 4


@pytest.mark.parametrize(
    "name,expected",
    [
        ("identityProof", DocumentCategory.IDENTITY_PROOF),
        ("addressProof", DocumentCategory.ADDRESS_PROOF),
        ("incomeTax", DocumentCategory.INCOME_TAX),
        ("bankStatement", DocumentCategory.BANK_STATEMENT),
    ],
)
def test_parse_category_accepts_known_names(name, expected):
    assert parse_category(name) is expected


@pytest.mark.parametrize("name", ["passport", "IdentityProof", "", "bankStatements"])
def test_parse_category_rejects_unknown_names(name):
    with pytest.raises(UnknownCategoryError):
        parse_category(name)


def test_prompt_for_accepts_enum_and_string():
    assert prompt_for(DocumentCategory.INCOME_TAX) == prompt_for("incomeTax")
    assert prompt_for("incomeTax").startswith("Analyze this income tax return")


def test_prompt_for_unknown_category_raises():
    with pytest.raises(UnknownCategoryError):
        prompt_for("utilityBill")


def test_bank_statement_prompt_tells_model_the_scoring_words():
    prompt = prompt_for(DocumentCategory.BANK_STATEMENT)

    for word in ("'invalid'", "'reject'", "'fake'"):
        assert word in prompt
