"""Owner identity parsing.

Owners are identified by a 32-byte public key. Operators usually configure
the human-readable bech32 form (``npub1...``); stores and descriptors use the
64-character lowercase hex form.
"""

from __future__ import annotations

import re

from bech32 import bech32_decode, convertbits

from domain.exceptions import ValidationError

NPUB_PREFIX = "npub"
PUBKEY_BYTES = 32

_HEX_PUBKEY = re.compile(r"^[0-9a-fA-F]{64}$")


def pubkey_from_npub(npub: str) -> str:
    """Decode a bech32 ``npub`` into a hex public key."""
    hrp, data = bech32_decode(npub.strip())
    if hrp != NPUB_PREFIX or data is None:
        msg = f"Invalid npub: {npub!r}"
        raise ValidationError(msg)

    decoded = convertbits(data, 5, 8, False)
    if decoded is None or len(decoded) != PUBKEY_BYTES:
        msg = f"npub does not encode a {PUBKEY_BYTES}-byte public key: {npub!r}"
        raise ValidationError(msg)

    return bytes(decoded).hex()


def parse_owner_pubkey(value: str) -> str:
    """Accept either a hex public key or an npub and return the hex form."""
    value = value.strip()
    if _HEX_PUBKEY.match(value):
        return value.lower()
    if value.startswith(NPUB_PREFIX):
        return pubkey_from_npub(value)

    msg = f"Owner must be a 64-char hex public key or an npub, got {value!r}"
    raise ValidationError(msg)
