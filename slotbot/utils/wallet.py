# slotbot/utils/wallet.py
from __future__ import annotations

import re

from slotbot.errors import ValidationError

WALLET_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")
WALLET_LENGTH = 42

MISSING_WALLET_MESSAGE = "Wallet address is required"
INVALID_WALLET_MESSAGE = "Wallet address format is invalid"


def normalize_wallet(raw: str | None) -> str:
    """
    Validates a 0x-prefixed 20-byte hex address and returns it lower-cased.
    Raises ValidationError on missing/malformed input.
    """
    if raw is None or not str(raw).strip():
        raise ValidationError("address", MISSING_WALLET_MESSAGE)

    address = str(raw).strip()
    if len(address) != WALLET_LENGTH or not WALLET_RE.match(address):
        raise ValidationError("address", INVALID_WALLET_MESSAGE)

    return address.lower()


def try_normalize_wallet(raw: str | None) -> str | None:
    """Optional-wallet variant: anything invalid is treated as absent."""
    try:
        return normalize_wallet(raw)
    except ValidationError:
        return None


def short_wallet(address: str) -> str:
    # 0x1234…abcd
    if len(address) <= 12:
        return address
    return f"{address[:6]}…{address[-4:]}"
