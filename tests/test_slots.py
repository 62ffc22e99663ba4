import pytest

from docverify.errors import IllegalTransitionError, UnknownCategoryError
from docverify.models import DocumentCategory
from docverify.slots import (
    DocumentSlot,
    SlotStatus,
    VideoSlot,
    VideoStatus,
    category_for_slot,
    slot_label,
)


@pytest.mark.parametrize(
    "slot,category",
    [
        ("identityProof", DocumentCategory.IDENTITY_PROOF),
        ("bankStatements", DocumentCategory.BANK_STATEMENT),
        ("taxReturns", DocumentCategory.INCOME_TAX),
        ("addressProof", DocumentCategory.ADDRESS_PROOF),
    ],
)
def test_slot_maps_to_category(slot, category):
    assert category_for_slot(slot) is category
    assert DocumentSlot(slot).category is category


def test_unknown_slot_is_rejected():
    with pytest.raises(UnknownCategoryError):
        DocumentSlot("utilityBill")


def test_slot_label_splits_camel_case():
    assert slot_label("bankStatements") == "bank Statements"
    assert slot_label("taxReturns") == "tax Returns"


def test_happy_path_transitions():
    slot = DocumentSlot("identityProof")

    slot.start("id.png")
    slot.transition(SlotStatus.VERIFYING)
    slot.transition(SlotStatus.VERIFIED)

    assert slot.is_verified


@pytest.mark.parametrize(
    "path,illegal",
    [
        ([], SlotStatus.VERIFYING),
        ([], SlotStatus.VERIFIED),
        ([SlotStatus.VALIDATING], SlotStatus.VERIFIED),
        ([SlotStatus.VALIDATING, SlotStatus.VERIFYING], SlotStatus.VALIDATING),
        ([SlotStatus.VALIDATING, SlotStatus.VERIFYING, SlotStatus.VERIFIED], SlotStatus.VERIFYING),
        ([SlotStatus.VALIDATING, SlotStatus.ERROR], SlotStatus.VERIFIED),
    ],
)
def test_illegal_transitions_raise(path, illegal):
    slot = DocumentSlot("addressProof")
    for status in path:
        slot.transition(status)

    with pytest.raises(IllegalTransitionError):
        slot.transition(illegal)


def test_new_file_resets_finished_slot():
    slot = DocumentSlot("taxReturns")
    slot.start("old.pdf")
    slot.url = "https://files.example.com/old.pdf"
    slot.transition(SlotStatus.VERIFYING)
    slot.transition(SlotStatus.VERIFICATION_FAILED)

    slot.start("new.pdf")

    assert slot.status is SlotStatus.VALIDATING
    assert slot.filename == "new.pdf"
    assert slot.url == ""
    assert slot.verdict is None


def test_video_transitions():
    video = VideoSlot()
    video.transition(VideoStatus.VALIDATING)
    video.transition(VideoStatus.SUCCESS)
    video.transition(VideoStatus.VALIDATING)
    video.transition(VideoStatus.ERROR)

    with pytest.raises(IllegalTransitionError):
        video.transition(VideoStatus.SUCCESS)
