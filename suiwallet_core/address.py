"""
Sui account addresses.

address = "0x" + hex(BLAKE2b-256(flag || public_key))

where ``flag`` is the signature-scheme byte (0x00 for Ed25519).
"""

from __future__ import annotations

import hashlib
import re

from suiwallet_core.errors import ArgumentError

ED25519_FLAG = 0x00
ED25519_PUBLIC_KEY_SIZE = 32
ADDRESS_SIZE = 32

_ADDRESS_RE = re.compile(r"0x[0-9a-f]{64}")


def sui_address(public_key: bytes) -> str:
    """Encode a 32-byte Ed25519 public key as a Sui address."""
    if not isinstance(public_key, (bytes, bytearray, memoryview)):
        raise ArgumentError("public key must be bytes")
    if len(public_key) != ED25519_PUBLIC_KEY_SIZE:
        raise ArgumentError(
            f"Ed25519 public key must be {ED25519_PUBLIC_KEY_SIZE} bytes, got {len(public_key)}"
        )
    digest = hashlib.blake2b(
        bytes([ED25519_FLAG]) + bytes(public_key), digest_size=ADDRESS_SIZE,
    ).digest()
    return "0x" + digest.hex()


def is_sui_address(value: str) -> bool:
    """True for a full-length, lower-case, 0x-prefixed address."""
    return isinstance(value, str) and _ADDRESS_RE.fullmatch(value) is not None
