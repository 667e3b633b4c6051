# main.py
# A naive Python implementation of SHA-1 (NIST FIPS 180-4), streaming variant.

from __future__ import annotations

import warnings
import typing as t
import struct

if t.TYPE_CHECKING:
    import _typeshed as _t

from functools import wraps

from typing_extensions import Self

from constants import (
    BLOCK_SIZE,
    DIGEST_SIZE,
    LENGTH_OFFSET,
    MASK32,
    MASK64,
    ROUNDS,
    SHA1_INITIAL_HASH_VALUES,
)
from functions import rotl, round_function
from utils import EngineFinalizedError, ensure_bytes


_WORDS = struct.Struct(">16I")
_STATE = struct.Struct(">5I")


def process_block(H: t.Sequence[int], block: t.Union[bytes, bytearray]) -> list:
    """Compresses one 64-byte block into the five state words *H*.

    See NIST FIPS 180-4, Section 6.1.2. Returns the new state, *H* is
    left untouched."""

    W: list = list(_WORDS.unpack(block))
    for i in range(16, ROUNDS):
        W.append(rotl(W[i - 3] ^ W[i - 8] ^ W[i - 14] ^ W[i - 16], 1))

    a, b, c, d, e = H

    for i in range(ROUNDS):
        f, k = round_function(i)
        temp = (rotl(a, 5) + f(b, c, d) + e + k + W[i]) & MASK32
        a, b, c, d, e = temp, a, rotl(b, 30), c, d

    return [(x + y) & MASK32 for x, y in zip(H, (a, b, c, d, e))]


def pad(pending: bytes, bit_length: int) -> bytearray:
    """The purpose of this padding is to ensure that the padded
    message is a multiple of 512 bits. See NIST FIPS 180-4, Section 5.1.1"""

    message = bytearray(pending)
    message.append(0x80)
    while len(message) % BLOCK_SIZE != LENGTH_OFFSET:
        message.append(0x00)
    message += (bit_length & MASK64).to_bytes(8, "big")
    return message


class HASH(object):
    """Incremental SHA-1 digest engine.

    ``update`` buffers input and compresses every complete 64-byte block
    as soon as it is available, so memory use stays bounded whatever the
    input size. ``finalize`` pads and emits the digest and ends the
    engine's life; ``digest``/``hexdigest`` work on a copy and may be
    called at any time, like their :mod:`hashlib` counterparts.
    """

    __slots__: tuple = (
        "_H",
        "_buffer",
        "_counter",
        "_finalized",
        "usedforsecurity",
    )

    name: str = "sha1"
    digest_size: int = DIGEST_SIZE
    block_size: int = BLOCK_SIZE

    def __new__(cls, *args, **kwds) -> Self:
        if kwds.get("usedforsecurity", False):
            warnings.warn(
                "SHA-1 is not considered secure for cryptographic purposes.",
                UserWarning,
                stacklevel=2,
            )
        return super().__new__(cls)

    def __init__(self, *, usedforsecurity: bool = False) -> None:
        self._H: list = list(SHA1_INITIAL_HASH_VALUES)
        self._buffer: bytearray = bytearray()
        self._counter: int = 0
        self._finalized: bool = False
        self.usedforsecurity = usedforsecurity

    def __repr__(self) -> str:
        return f"<{self.name} HASH object @ {hex(id(self))}>"

    @property
    def finalized(self) -> bool:
        return self._finalized

    def _check_live(self) -> None:
        if self._finalized:
            raise EngineFinalizedError(
                "SHA-1 engine already finalized; create a new one or use copy()"
            )

    def update(self, obj: _t.ReadableBuffer, /) -> None:
        self._check_live()
        data = ensure_bytes(obj)
        self._buffer.extend(data)
        self._counter = (self._counter + len(data)) & MASK64

        if len(self._buffer) < BLOCK_SIZE:
            return

        end = len(self._buffer) - len(self._buffer) % BLOCK_SIZE
        H = self._H
        for offset in range(0, end, BLOCK_SIZE):
            H = process_block(H, self._buffer[offset : offset + BLOCK_SIZE])
        self._H = H
        del self._buffer[:end]

    def _final_state(self) -> list:
        message = pad(self._buffer, self._counter * 8)
        H = self._H
        for offset in range(0, len(message), BLOCK_SIZE):
            H = process_block(H, message[offset : offset + BLOCK_SIZE])
        return H

    def finalize(self) -> bytes:
        """Pads the pending input, processes the final block(s) and returns
        the 20-byte digest. The engine cannot be used afterwards."""
        self._check_live()
        self._H = self._final_state()
        self._buffer.clear()
        self._finalized = True
        return _STATE.pack(*self._H)

    def digest(self) -> bytes:
        if self._finalized:
            return _STATE.pack(*self._H)
        return _STATE.pack(*self._final_state())

    def hexdigest(self) -> str:
        return self.digest().hex()

    def copy(self) -> Self:
        self._check_live()
        clone = object.__new__(type(self))
        clone._H = self._H[:]
        clone._buffer = self._buffer[:]
        clone._counter = self._counter
        clone._finalized = False
        clone.usedforsecurity = self.usedforsecurity
        return clone


"""
NOTE: The `usedforsecurity` parameter is primarily advisory. It has no effect
on the digest; setting `usedforsecurity=True` only emits a warning, since SHA-1
is broken for collision resistance.
"""


def _shadef(func: t.Callable[..., HASH]) -> t.Callable[..., HASH]:

    @wraps(func)
    def wrapper(string: _t.ReadableBuffer = b"", *, usedforsecurity: bool = False) -> HASH:

        if isinstance(string, str):
            raise TypeError("Strings must be encoded before hashing")

        h = HASH(usedforsecurity=usedforsecurity)

        if string:
            h.update(string)
        return h

    wrapper.digest_size = DIGEST_SIZE
    wrapper.block_size = BLOCK_SIZE
    wrapper.name = func.__name__
    return wrapper


@_shadef
def sha1(string: _t.ReadableBuffer = b"", *, usedforsecurity: bool = False) -> HASH: ...


__all__: list = ["HASH", "sha1", "pad", "process_block"]
