"""
Hardened-only HD key derivation for Ed25519 (SLIP-0010).

Master key:
    I = HMAC-SHA512(key=b"ed25519 seed", data=seed)
    key, chain_code = I[:32], I[32:]

Child key (hardened index i >= 2**31):
    I = HMAC-SHA512(key=chain_code, data=0x00 || key || ser32(i))
    child_key, child_chain_code = I[:32], I[32:]

Ed25519 has no safe public-parent derivation, so every path segment
must be hardened:  m/44'/784'/0'/0'/0'
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import re
import struct
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from suiwallet_core.errors import ArgumentError, FormatError

if TYPE_CHECKING:
    from suiwallet_core.keypair import AddressEncoder, Ed25519KeyPair

log = logging.getLogger("suiwallet.hd")

HARDENED_OFFSET = 0x80000000
MAX_INDEX = 0xFFFFFFFF
ED25519_CURVE_SEED = b"ed25519 seed"

BIP44_PURPOSE = 44
SUI_COIN_TYPE = 784
DEFAULT_PATH = f"m/{BIP44_PURPOSE}'/{SUI_COIN_TYPE}'/0'/0'/0'"

KEY_SIZE = 32
MIN_SEED_SIZE = 16
MAX_SEED_SIZE = 64

_PATH_RE = re.compile(r"m(/[0-9]+')+")


# ===================================================================
#  Path handling
# ===================================================================

def is_valid_path(path: Any) -> bool:
    """True if *path* is a well-formed hardened-only derivation path."""
    try:
        parse_path(path)
    except FormatError:
        return False
    return True


def parse_path(path: Any) -> list[int]:
    """
    Parse ``m/a'/b'/...`` into segment values *without* the hardened
    offset.  Raises FormatError for anything else.
    """
    if not isinstance(path, str) or not _PATH_RE.fullmatch(path):
        raise FormatError(f"Invalid derivation path: {path!r}")
    try:
        segments = [int(part[:-1]) for part in path.split("/")[1:]]
    except ValueError as exc:
        raise FormatError(f"Invalid derivation path: {path!r}") from exc
    for value in segments:
        if value >= HARDENED_OFFSET:
            raise FormatError(f"Path segment out of range: {value}")
    return segments


def account_path(account_index: int) -> str:
    """The Sui derivation path for an account: m/44'/784'/{index}'/0'/0'."""
    if isinstance(account_index, bool) or not isinstance(account_index, int):
        raise ArgumentError("account index must be an integer")
    if not 0 <= account_index < HARDENED_OFFSET:
        raise ArgumentError(
            f"account index must be in [0, {HARDENED_OFFSET - 1}], got {account_index}"
        )
    return f"m/{BIP44_PURPOSE}'/{SUI_COIN_TYPE}'/{account_index}'/0'/0'"


# ===================================================================
#  Derivation primitives
# ===================================================================

def _hmac_sha512(key: bytes, data: bytes) -> tuple[bytes, bytes]:
    digest = hmac.new(key, data, hashlib.sha512).digest()
    return digest[:KEY_SIZE], digest[KEY_SIZE:]


def _check_seed(seed: Any) -> bytes:
    if not isinstance(seed, (bytes, bytearray, memoryview)):
        raise ArgumentError("seed must be bytes")
    seed = bytes(seed)
    if not MIN_SEED_SIZE <= len(seed) <= MAX_SEED_SIZE:
        raise ArgumentError(
            f"seed must be {MIN_SEED_SIZE}..{MAX_SEED_SIZE} bytes, got {len(seed)}"
        )
    return seed


def master_key_from_seed(seed: bytes) -> tuple[bytes, bytes]:
    """Return (key, chain_code) for the root of the tree."""
    return _hmac_sha512(ED25519_CURVE_SEED, _check_seed(seed))


def derive_child(key: bytes, chain_code: bytes, index: int) -> tuple[bytes, bytes]:
    """One hardened derivation step.  *index* must already include the offset."""
    for name, value in (("key", key), ("chain code", chain_code)):
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise ArgumentError(f"{name} must be bytes")
    if len(key) != KEY_SIZE or len(chain_code) != KEY_SIZE:
        raise ArgumentError("key and chain code must be 32 bytes each")
    if isinstance(index, bool) or not isinstance(index, int):
        raise ArgumentError("index must be an integer")
    if not HARDENED_OFFSET <= index <= MAX_INDEX:
        raise ArgumentError(f"only hardened indices are supported, got {index}")
    data = b"\x00" + bytes(key) + struct.pack(">I", index)
    return _hmac_sha512(bytes(chain_code), data)


def derive_path(seed: bytes, path: str = DEFAULT_PATH) -> tuple[bytes, bytes]:
    """Walk *path* from the master key of *seed*; returns (key, chain_code)."""
    parse_path(path)
    node = HDNode.from_seed(seed).derive_path(path)
    return node.key, node.chain_code


# ===================================================================
#  HD node
# ===================================================================

@dataclass(frozen=True)
class HDNode:
    """
    A node in the hardened-only derivation tree.

    ``index`` is the raw child index including the hardened offset
    (0 for the master node).
    """
    key: bytes
    chain_code: bytes
    depth: int = 0
    index: int = 0

    @classmethod
    def from_seed(cls, seed: bytes) -> HDNode:
        """Create the master node from a 16..64 byte seed."""
        key, chain_code = master_key_from_seed(seed)
        return cls(key=key, chain_code=chain_code)

    def derive_child(self, index: int) -> HDNode:
        """Derive a child at a hardened *index* (offset already applied)."""
        key, chain_code = derive_child(self.key, self.chain_code, index)
        return HDNode(key=key, chain_code=chain_code, depth=self.depth + 1, index=index)

    def derive_path(self, path: str) -> HDNode:
        """
        Derive along a path string like "m/44'/784'/0'/0'/0'".

        The whole path is validated before any HMAC is computed.
        """
        segments = parse_path(path)
        node = self
        for value in segments:
            node = node.derive_child(value + HARDENED_OFFSET)
        log.debug("derived path", extra={"path": path})
        return node

    def to_keypair(self, address_encoder: AddressEncoder | None = None) -> Ed25519KeyPair:
        """Use this node's key as an Ed25519 seed."""
        from suiwallet_core.keypair import Ed25519KeyPair
        return Ed25519KeyPair.from_seed(self.key, address_encoder=address_encoder)

    def __repr__(self) -> str:
        return f"HDNode(depth={self.depth}, index={self.index})"
