from __future__ import annotations

import pytest

from slotbot.errors import ValidationError
from slotbot.services.signature import looks_like_signature, verify_wallet_signature
from slotbot.utils.wallet import normalize_wallet, short_wallet, try_normalize_wallet


def test_normalize_lowercases():
    assert normalize_wallet("0x" + "ABCDEF0123" * 4) == "0x" + "abcdef0123" * 4


@pytest.mark.parametrize("raw", [None, "", "0x", "0x" + "z" * 40, "1x" + "a" * 40, "0x" + "a" * 39])
def test_normalize_rejects(raw):
    with pytest.raises(ValidationError) as e:
        normalize_wallet(raw)
    assert e.value.field == "address"
    assert try_normalize_wallet(raw) is None


def test_short_wallet():
    assert short_wallet("0x" + "a" * 40) == "0xaaaa…aaaa"


@pytest.mark.parametrize(
    "sig, ok",
    [
        ("0x" + "ab" * 65, True),
        ("0x" + "AB" * 70, True),
        ("0x" + "ab" * 64, False),  # too short
        ("ab" * 66, False),  # no prefix
        ("0x" + "zz" * 65, False),  # not hex
        (None, False),
    ],
)
def test_signature_shape(sig, ok):
    assert looks_like_signature(sig) is ok


def test_verify_wallet_signature_checks_format_only():
    wallet = "0x" + "a" * 40
    good = "0x" + "ab" * 65

    assert verify_wallet_signature(wallet, "spin", good) is True
    # signer is not recovered: the message does not matter
    assert verify_wallet_signature(wallet, "anything else", good) is True
    assert verify_wallet_signature(wallet, "spin", "0x1234") is False
    assert verify_wallet_signature(wallet, "spin", None) is False
    assert verify_wallet_signature("not-a-wallet", "spin", good) is False
