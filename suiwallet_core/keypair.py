"""
Ed25519 key pairs derived from a mnemonic.

    mnemonic + passphrase --PBKDF2--> seed --SLIP-0010--> 32-byte key
    32-byte key --Ed25519--> (public key, expanded private key)

Account *n* lives at m/44'/784'/n'/0'/0'.  Address encoding is a
pluggable callable (``bytes -> str``); Sui addresses are the default.
"""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Callable

from nacl.bindings import crypto_sign_seed_keypair
from nacl.exceptions import BadSignatureError
from nacl.signing import SigningKey, VerifyKey

from suiwallet_core.address import sui_address
from suiwallet_core.errors import ArgumentError
from suiwallet_core.hd import HDNode, account_path
from suiwallet_core.mnemonic import mnemonic_to_seed

log = logging.getLogger("suiwallet.keypair")

AddressEncoder = Callable[[bytes], str]

SEED_SIZE = 32
PUBLIC_KEY_SIZE = 32
PRIVATE_KEY_SIZE = 64
SIGNATURE_SIZE = 64


class Ed25519KeyPair:
    """
    An Ed25519 signing key pair.

    ``private_key`` is the 64-byte expanded form (seed || public key),
    as produced by NaCl's ``crypto_sign_seed_keypair``.
    """

    def __init__(
        self,
        public_key: bytes,
        private_key: bytes,
        address_encoder: AddressEncoder | None = None,
    ):
        for name, value in (("public key", public_key), ("private key", private_key)):
            if not isinstance(value, (bytes, bytearray, memoryview)):
                raise ArgumentError(f"{name} must be bytes")
        if len(public_key) != PUBLIC_KEY_SIZE:
            raise ArgumentError(f"public key must be {PUBLIC_KEY_SIZE} bytes")
        if len(private_key) != PRIVATE_KEY_SIZE:
            raise ArgumentError(f"private key must be {PRIVATE_KEY_SIZE} bytes")
        if bytes(private_key[SEED_SIZE:]) != bytes(public_key):
            raise ArgumentError("private key does not belong to public key")
        self._public_key = bytes(public_key)
        self._private_key = bytes(private_key)
        self._address_encoder = address_encoder or sui_address
        self._signing_key = SigningKey(self._private_key[:SEED_SIZE])

    @classmethod
    def from_seed(
        cls, seed: bytes, address_encoder: AddressEncoder | None = None,
    ) -> Ed25519KeyPair:
        """Expand a 32-byte Ed25519 seed into a key pair."""
        if not isinstance(seed, (bytes, bytearray, memoryview)) or len(seed) != SEED_SIZE:
            raise ArgumentError(f"Ed25519 seed must be {SEED_SIZE} bytes")
        public_key, private_key = crypto_sign_seed_keypair(bytes(seed))
        return cls(public_key, private_key, address_encoder=address_encoder)

    # ---- views ----

    @property
    def public_key(self) -> bytes:
        return self._public_key

    @property
    def private_key(self) -> bytes:
        return self._private_key

    @property
    def public_key_base64(self) -> str:
        return base64.b64encode(self._public_key).decode("ascii")

    @property
    def private_key_base64(self) -> str:
        return base64.b64encode(self._private_key).decode("ascii")

    @property
    def address(self) -> str:
        return self._address_encoder(self._public_key)

    def to_address(self, public_key: bytes) -> str:
        """Encode an arbitrary public key with this pair's address encoder."""
        return self._address_encoder(public_key)

    # ---- signing ----

    def sign(self, message: bytes) -> bytes:
        """Deterministic 64-byte Ed25519 signature over *message*."""
        if not isinstance(message, (bytes, bytearray, memoryview)):
            raise ArgumentError("message must be bytes")
        return bytes(self._signing_key.sign(bytes(message)).signature)

    def sign_base64(self, message_b64: str) -> str:
        """Sign a base64-encoded message; returns the base64 signature."""
        try:
            message = base64.b64decode(message_b64, validate=True)
        except (binascii.Error, TypeError, ValueError) as exc:
            raise ArgumentError("message is not valid base64") from exc
        return base64.b64encode(self.sign(message)).decode("ascii")

    def verify(self, message: bytes, signature: bytes) -> bool:
        """Check a signature made by this pair's private key."""
        try:
            VerifyKey(self._public_key).verify(bytes(message), bytes(signature))
        except (BadSignatureError, ValueError, TypeError):
            return False
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ed25519KeyPair):
            return NotImplemented
        return self._public_key == other._public_key and self._private_key == other._private_key

    def __hash__(self) -> int:
        return hash(self._public_key)

    def __repr__(self) -> str:
        return f"Ed25519KeyPair({self.public_key_base64})"


# ===================================================================
#  Factories
# ===================================================================

def keypair_from_seed(
    seed: bytes,
    account_index: int = 0,
    address_encoder: AddressEncoder | None = None,
) -> Ed25519KeyPair:
    """Derive account *account_index* from a raw 16..64 byte seed."""
    path = account_path(account_index)
    node = HDNode.from_seed(seed).derive_path(path)
    log.debug("derived account key pair", extra={"path": path, "account_index": account_index})
    return node.to_keypair(address_encoder)


def keypair_from_mnemonic(
    mnemonic: str,
    account_index: int,
    passphrase: str = "",
    address_encoder: AddressEncoder | None = None,
) -> Ed25519KeyPair:
    """Derive account *account_index* from a BIP-39 mnemonic phrase."""
    # Index is checked before the seed is computed.
    account_path(account_index)
    seed = mnemonic_to_seed(mnemonic, passphrase)
    return keypair_from_seed(seed, account_index, address_encoder)
