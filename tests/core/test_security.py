"""Tests for app/core/security.py and app/user/mobile.py."""

import re

from hypothesis import given
from hypothesis import strategies as st

from app.core.security import (
    generate_numeric_code,
    generate_reset_token,
    hash_password,
    verify_password,
)
from app.user.mobile import (
    is_valid_full_mobile,
    is_valid_local_mobile,
    is_valid_profile_mobile,
    to_full_mobile,
    to_whatsapp_chat_id,
)

local_mobiles = st.builds(
    lambda first, rest: first + rest,
    st.sampled_from("6789"),
    st.text(alphabet="0123456789", min_size=9, max_size=9),
)


def test_password_hash_round_trip():
    hashed = hash_password("s3cret-pass")

    assert hashed != "s3cret-pass"
    assert verify_password("s3cret-pass", hashed)
    assert not verify_password("wrong", hashed)


def test_verify_password_without_hash():
    assert verify_password("anything", None) is False


def test_reset_token_shape():
    token = generate_reset_token()

    assert re.fullmatch(r"[0-9a-f]{40}", token)
    assert token != generate_reset_token()


def test_numeric_code_default_range():
    for _ in range(200):
        assert 100000 <= int(generate_numeric_code()) <= 999999


@given(st.integers(min_value=1, max_value=12))
def test_numeric_code_has_requested_length(length):
    code = generate_numeric_code(length)

    assert len(code) == length
    assert code.isdigit()
    assert code[0] != "0"


@given(local_mobiles)
def test_valid_local_mobile_maps_to_chat_id(mobile):
    assert is_valid_local_mobile(mobile)
    full = to_full_mobile(mobile)
    assert is_valid_full_mobile(full)
    assert is_valid_profile_mobile(full)
    assert to_whatsapp_chat_id(full) == f"91{mobile}@c.us"


@given(st.text(max_size=12).filter(lambda s: not re.fullmatch(r"[6-9][0-9]{9}", s)))
def test_everything_else_is_rejected(value):
    assert not is_valid_local_mobile(value)


def test_non_ascii_digits_rejected():
    assert not is_valid_local_mobile("９８７６５４３２１０")
    assert not is_valid_local_mobile("98765432١٠")


def test_profile_mobile_accepts_any_ten_digits():
    assert is_valid_profile_mobile("+910123456789")
    assert not is_valid_full_mobile("+910123456789")
