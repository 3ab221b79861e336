# slotbot/services/signature.py
from __future__ import annotations

import re

from slotbot.utils.wallet import try_normalize_wallet

SIGNATURE_PREFIX = "0x"
# 65-byte ECDSA signature as hex: 0x + 130 chars
MIN_SIGNATURE_LENGTH = 132
MAX_SIGNATURE_LENGTH = 512

_HEX_BODY = re.compile(r"^[0-9a-fA-F]+$")


def looks_like_signature(signature: str | None) -> bool:
    """
    Shape check only: 0x prefix, hex body, long enough for r/s/v.

    The signer is NOT recovered, so any well-formed hex string passes for any
    wallet. Signatures are kept for audit and must not be used to authorize
    anything until real recovery exists.
    """
    if not signature or len(signature) < MIN_SIGNATURE_LENGTH:
        return False
    if not signature.startswith(SIGNATURE_PREFIX):
        return False
    return bool(_HEX_BODY.match(signature[len(SIGNATURE_PREFIX):]))


def verify_wallet_signature(address: str, message: str, signature: str | None) -> bool:
    """
    True when `address` is a valid wallet and `signature` is well-formed.

    `message` is accepted for the recovery step that does not exist yet; it
    does not affect the result.
    """
    # TODO: recover the EIP-191 signer of `message` and compare it to `address`
    if try_normalize_wallet(address) is None:
        return False
    return looks_like_signature(signature)
