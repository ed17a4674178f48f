"""
Streaming PBKDF2 (RFC 2898 / RFC 8018) over a pluggable HMAC digest.

Unlike ``hashlib.pbkdf2_hmac`` which produces a fixed-length key in one
call, a ``StreamPBKDF2`` session hands out the derived-key stream in
pieces:

  - ``get_bytes(n)`` returns the next *n* bytes of the stream
  - bytes computed beyond what a call needs are kept for the next call
  - ``reset()`` rewinds to block 1

Supported digests: SHA-1, SHA-256, SHA-384, SHA-512.

Usage:
    with StreamPBKDF2(b"password", b"saltsalt", 4096, "sha256") as kdf:
        key = kdf.get_bytes(32)
        iv = kdf.get_bytes(16)
"""

from __future__ import annotations

import hmac
import logging
import struct
from enum import Enum
from typing import Any

from suiwallet_core.errors import ArgumentError, UnsupportedAlgorithmError

log = logging.getLogger("suiwallet.pbkdf2")

MIN_SALT_SIZE = 8
MAX_BLOCK_INDEX = 0xFFFFFFFF

BytesLike = bytes | bytearray | memoryview


class HashAlgorithm(str, Enum):
    """Digests accepted as the PBKDF2 pseudo-random function."""
    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"

    @classmethod
    def resolve(cls, value: Any) -> HashAlgorithm:
        """
        Map an enum member or a name such as ``"SHA-256"`` / ``"sha256"``
        onto a member.  Raises UnsupportedAlgorithmError otherwise.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            name = value.strip().lower().replace("-", "").replace("_", "")
            for member in cls:
                if member.value == name:
                    return member
        raise UnsupportedAlgorithmError(f"{value!r} is not a supported hash algorithm")


class KeyedHash:
    """HMAC keyed once with the password, reused for every PRF call."""

    def __init__(self, algorithm: HashAlgorithm, key: BytesLike):
        self.algorithm = algorithm
        if isinstance(key, memoryview):
            key = bytes(key)
        self._mac = hmac.new(key, digestmod=algorithm.value)
        self.digest_size: int = self._mac.digest_size

    def compute(self, data: BytesLike) -> bytes:
        mac = self._mac.copy()
        mac.update(data)
        return mac.digest()


def _require_bytes(name: str, value: Any) -> bytearray:
    if value is None:
        raise ArgumentError(f"{name} is required")
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise ArgumentError(f"{name} must be bytes, got {type(value).__name__}")
    return bytearray(value)


def _require_iterations(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ArgumentError("iteration count must be an integer")
    if value <= 0:
        raise ArgumentError("iteration count must be positive")
    return value


def _wipe(buf: bytearray | None) -> None:
    if buf is not None:
        for i in range(len(buf)):
            buf[i] = 0


class StreamPBKDF2:
    """
    A single PBKDF2 derivation session.

    The session owns mutable state (block counter and a window of
    leftover bytes) so it must not be shared between concurrent callers.
    Password, salt and the leftover buffer are zeroed by ``close()``,
    which ``with`` guarantees on every exit path.  Key material inside
    the HMAC object and the per-block U values are immutable and are
    left to the garbage collector.
    """

    def __init__(
        self,
        password: BytesLike,
        salt: BytesLike,
        iterations: int,
        algorithm: HashAlgorithm | str = HashAlgorithm.SHA1,
        *,
        min_salt_size: int = MIN_SALT_SIZE,
    ):
        self._min_salt_size = min_salt_size
        self._password: bytearray | None = None
        self._salt: bytearray | None = None
        self._buffer: bytearray | None = None
        try:
            self._salt = self._check_salt(salt)
            self._iterations = _require_iterations(iterations)
            self._password = _require_bytes("password", password)
            self._algorithm = HashAlgorithm.resolve(algorithm)
            self._prf = KeyedHash(self._algorithm, self._password)
        except ArgumentError:
            _wipe(self._salt)
            _wipe(self._password)
            raise
        self._block_size = self._prf.digest_size
        self._closed = False
        self._initialize()

    # ---- configuration ----

    @property
    def algorithm(self) -> HashAlgorithm:
        return self._algorithm

    @property
    def block_size(self) -> int:
        """Bytes produced per PBKDF2 block (the digest size)."""
        return self._block_size

    @property
    def iteration_count(self) -> int:
        return self._iterations

    @iteration_count.setter
    def iteration_count(self, value: int) -> None:
        self._ensure_open()
        self._iterations = _require_iterations(value)
        self._initialize()

    @property
    def salt(self) -> bytes:
        self._ensure_open()
        return bytes(self._salt)

    @salt.setter
    def salt(self, value: BytesLike) -> None:
        self._ensure_open()
        new_salt = self._check_salt(value)
        _wipe(self._salt)
        self._salt = new_salt
        self._initialize()

    def _set_password(self, value: BytesLike) -> None:
        self._ensure_open()
        new_password = _require_bytes("password", value)
        self._prf = KeyedHash(self._algorithm, new_password)
        _wipe(self._password)
        self._password = new_password
        self._initialize()

    password = property(None, _set_password, doc="Write-only; re-keys the PRF.")

    # ---- stream ----

    def get_bytes(self, count: int) -> bytes:
        """Return the next *count* bytes of the derived-key stream."""
        self._ensure_open()
        if isinstance(count, bool) or not isinstance(count, int):
            raise ArgumentError("byte count must be an integer")
        if count <= 0:
            raise ArgumentError("byte count must be positive")

        out = bytearray()
        available = self._end - self._start
        if available > 0:
            take = min(count, available)
            out += self._buffer[self._start:self._start + take]
            self._start += take
            if self._start == self._end:
                self._start = self._end = 0
            if take == count:
                return bytes(out)

        while len(out) < count:
            block = self._next_block()
            needed = count - len(out)
            if needed >= self._block_size:
                out += block
                continue
            out += block[:needed]
            remainder = self._block_size - needed
            self._buffer[:remainder] = block[needed:]
            self._start, self._end = 0, remainder
        return bytes(out)

    def reset(self) -> None:
        """Rewind the stream to block 1 and drop any leftover bytes."""
        self._ensure_open()
        self._initialize()

    # ---- lifecycle ----

    def close(self) -> None:
        if self._closed:
            return
        _wipe(self._buffer)
        _wipe(self._password)
        _wipe(self._salt)
        self._start = self._end = 0
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> StreamPBKDF2:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else f"block={self._block}"
        return (
            f"StreamPBKDF2({self._algorithm.name}, "
            f"iterations={self._iterations}, {state})"
        )

    # ---- internals ----

    def _check_salt(self, value: Any) -> bytearray:
        salt = _require_bytes("salt", value)
        if len(salt) < self._min_salt_size:
            _wipe(salt)
            raise ArgumentError(f"salt must be at least {self._min_salt_size} bytes")
        return salt

    def _ensure_open(self) -> None:
        if self._closed:
            raise ArgumentError("PBKDF2 session is closed")

    def _initialize(self) -> None:
        _wipe(self._buffer)
        self._buffer = bytearray(self._block_size)
        self._block = 1
        self._start = self._end = 0

    def _next_block(self) -> bytes:
        # F(P, S, c, i) = U1 ^ U2 ^ ... ^ Uc
        if self._block > MAX_BLOCK_INDEX:
            raise ArgumentError("derived key stream exhausted")
        message = self._salt + struct.pack(">I", self._block)
        u = self._prf.compute(message)
        _wipe(message)
        acc = int.from_bytes(u, "big")
        for _ in range(1, self._iterations):
            u = self._prf.compute(u)
            acc ^= int.from_bytes(u, "big")
        log.debug(
            "computed PBKDF2 block %d",
            self._block,
            extra={"algorithm": self._algorithm.value, "iterations": self._iterations},
        )
        self._block += 1
        return acc.to_bytes(self._block_size, "big")
