"""Tests for certificate id candidates."""
import random

from siahrokh.services.certificates import (
    CERTIFICATE_ID_RE,
    generate_certificate_id,
    is_certificate_id,
    normalize_certificate_id,
)


def test_generated_ids_match_pattern():
    for _ in range(500):
        cid = generate_certificate_id()
        assert len(cid) == 10
        assert CERTIFICATE_ID_RE.match(cid), cid
        assert cid[:5].isdigit()
        assert cid[5:].isalpha() and cid[5:].isupper()


def test_digits_are_zero_padded():
    class LowRandom(random.Random):
        def randrange(self, *args, **kwargs):
            return 42

    cid = generate_certificate_id(LowRandom())
    assert cid.startswith("00042")


def test_seeded_generator_is_deterministic():
    assert generate_certificate_id(random.Random(7)) == generate_certificate_id(random.Random(7))


def test_normalize_certificate_id():
    assert normalize_certificate_id("  01234abcde ") == "01234ABCDE"
    assert normalize_certificate_id("۰۱۲۳۴abcde") == "01234ABCDE"
    assert normalize_certificate_id(None) == ""


def test_is_certificate_id():
    assert is_certificate_id("01234ABCDE")
    assert not is_certificate_id("01234abcde")
    assert not is_certificate_id("ABCDE01234")
    assert not is_certificate_id("01234ABCD")
