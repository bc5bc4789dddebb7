"""Password strength and hashing."""
import pytest

from app.core.security import hash_password, is_strong_password, verify_password


@pytest.mark.parametrize(
    "password",
    ["Abcdef12", "Zz9aaaaa", "P4ssword with spaces", "ÄbcdefG1", "xY1" * 10],
)
def test_strong_passwords(password):
    assert is_strong_password(password) is True


@pytest.mark.parametrize(
    "password, reason",
    [
        ("abcdef12", "no uppercase"),
        ("ABCDEF12", "no lowercase"),
        ("Abcdefgh", "no digit"),
        ("Abc123", "too short"),
        ("Abcde1", "too short"),
        ("", "empty"),
    ],
)
def test_weak_passwords(password, reason):
    assert is_strong_password(password) is False, reason


def test_exactly_eight_characters_is_enough():
    assert is_strong_password("aB3" + "x" * 5) is True
    assert is_strong_password("aB3" + "x" * 4) is False


def test_special_characters_are_not_required_or_rejected():
    assert is_strong_password("Abcdefg1") is True
    assert is_strong_password("Abc!@#$%1") is True


def test_non_ascii_letters_do_not_count_as_cases():
    # é and É are not ASCII letters, so only the digit requirement is met here.
    assert is_strong_password("éééééÉÉ1") is False


def test_non_string_input_is_not_strong():
    assert is_strong_password(None) is False
    assert is_strong_password(12345678) is False


def test_hash_roundtrip():
    hashed = hash_password("Abcdef12")
    assert hashed != "Abcdef12"
    assert verify_password("Abcdef12", hashed)
    assert not verify_password("abcdef12", hashed)
