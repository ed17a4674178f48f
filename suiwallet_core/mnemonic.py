"""
BIP-39 mnemonic to seed conversion.

seed = PBKDF2-HMAC-SHA512(
    password = NFKD(mnemonic),
    salt     = "mnemonic" + NFKD(passphrase),
    iterations = 2048,
    length   = 64,
)

The phrase is not checked against a wordlist: a typo yields a different,
equally valid-looking seed.
"""

from __future__ import annotations

import logging
import unicodedata

from suiwallet_core.errors import ArgumentError
from suiwallet_core.pbkdf2 import HashAlgorithm, StreamPBKDF2

log = logging.getLogger("suiwallet.mnemonic")

SEED_SIZE = 64
SEED_ITERATIONS = 2048
SALT_PREFIX = "mnemonic"


def _normalize(name: str, value: str) -> bytes:
    if not isinstance(value, str):
        raise ArgumentError(f"{name} must be a string")
    return unicodedata.normalize("NFKD", value).encode("utf-8")


def mnemonic_to_seed(mnemonic: str, passphrase: str = "") -> bytes:
    """Convert a mnemonic phrase (and optional passphrase) to a 64-byte seed."""
    password = _normalize("mnemonic", mnemonic)
    salt = SALT_PREFIX.encode("utf-8") + _normalize("passphrase", passphrase)
    # The salt always carries the 8-byte prefix, so the generic minimum is moot.
    with StreamPBKDF2(
        password, salt, SEED_ITERATIONS, HashAlgorithm.SHA512, min_salt_size=0,
    ) as kdf:
        seed = kdf.get_bytes(SEED_SIZE)
    log.debug("derived mnemonic seed", extra={"iterations": SEED_ITERATIONS})
    return seed
