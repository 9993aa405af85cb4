"""Tests for registration submission validation."""
import pytest

from siahrokh.errors import ValidationFailed
from siahrokh.services.validation import (
    ReceiptInfo,
    RegistrationSubmission,
    ensure_valid,
    validate_submission,
)


def _valid(**overrides) -> RegistrationSubmission:
    values = {
        "tournament_id": "t-1",
        "name": "Sara Ahmadi",
        "phone": "0912 345 6789",
        "email": "sara@example.com",
        "year_of_birth": "2005",
        "agreed_tos": True,
        "receipt": ReceiptInfo(filename="receipt.png", content_type="image/png", size=2048),
    }
    values.update(overrides)
    return RegistrationSubmission(**values)


def _single_error(**overrides) -> str:
    errors = validate_submission(_valid(**overrides).normalized())
    assert len(errors) == 1, errors
    return errors[0].lower()


def test_valid_submission_has_no_errors():
    assert validate_submission(_valid()) == []


def test_name_too_short():
    assert "name" in _single_error(name=" A ")


def test_phone_too_short():
    assert "phone" in _single_error(phone="12345")


def test_phone_bad_characters():
    assert "phone" in _single_error(phone="0912-345-ABCD")


def test_phone_persian_digits_accepted():
    assert validate_submission(_valid(phone="۰۹۱۲ ۳۴۵ ۶۷۸۹").normalized()) == []


def test_email_needs_at_sign():
    assert "email" in _single_error(email="sara.example.com")


@pytest.mark.parametrize("year", ["12345", "۱۲۳", "19a0", ""])
def test_year_must_be_four_digits(year):
    assert "year" in _single_error(year_of_birth=year)


@pytest.mark.parametrize("year", ["۲۰۰۵", "٢٠٠٥", "۲٠۰٥"])
def test_year_non_ascii_digits_accepted_after_normalization(year):
    submission = _valid(year_of_birth=year).normalized()
    assert submission.year_of_birth == "2005"
    assert validate_submission(submission) == []


def test_missing_receipt():
    assert "file" in _single_error(receipt=None)


def test_receipt_wrong_type():
    msg = _single_error(receipt=ReceiptInfo(filename="r.gif", content_type="image/gif", size=10))
    assert "png" in msg


def test_receipt_too_large():
    msg = _single_error(receipt=ReceiptInfo(filename="r.pdf", content_type="application/pdf", size=10 * 1024 * 1024 + 1))
    assert "size" in msg


def test_receipt_type_and_size_both_reported():
    receipt = ReceiptInfo(filename="r.gif", content_type="image/gif", size=20 * 1024 * 1024)
    assert len(validate_submission(_valid(receipt=receipt))) == 2


@pytest.mark.parametrize("agreed", [False, "true", 1, None])
def test_terms_must_be_literal_true(agreed):
    assert "terms" in _single_error(agreed_tos=agreed)


def test_tournament_required():
    assert "tournament" in _single_error(tournament_id="")


def test_all_rules_reported_in_order():
    submission = RegistrationSubmission(
        tournament_id=None,
        name="A",
        phone="12345",
        email="nope",
        year_of_birth="۱۲۳",
        agreed_tos=False,
        receipt=None,
    ).normalized()
    errors = [e.lower() for e in validate_submission(submission)]
    assert len(errors) == 7
    for keyword, error in zip(["name", "phone", "email", "year", "file", "terms", "tournament"], errors):
        assert keyword in error


def test_ensure_valid_raises_with_all_messages():
    with pytest.raises(ValidationFailed) as exc:
        ensure_valid(_valid(name="A", phone="1"))
    assert len(exc.value.errors) == 2
    assert exc.value.status_code == 400
