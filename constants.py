# constants.py
# Fixed SHA-1 parameters, see NIST FIPS 180-4, Sections 4.2.1 and 5.3.1.

from typing import Final

# Initial Hash Values
SHA1_INITIAL_HASH_VALUES: Final[tuple] = (
    0x67452301,
    0xEFCDAB89,
    0x98BADCFE,
    0x10325476,
    0xC3D2E1F0,
)

# One constant per group of twenty rounds, floor(2**30 * sqrt(n)) for n in 2, 3, 5, 10.
K1: Final[tuple] = (
    0x5A827999,
    0x6ED9EBA1,
    0x8F1BBCDC,
    0xCA62C1D6,
)

ROUNDS: Final[int] = 80

BLOCK_SIZE: Final[int] = 64
DIGEST_SIZE: Final[int] = 20

# Offset of the 8-byte length field inside the last padded block.
LENGTH_OFFSET: Final[int] = BLOCK_SIZE - 8

MASK32: Final[int] = 0xFFFFFFFF
MASK64: Final[int] = 0xFFFFFFFFFFFFFFFF

# Read size used when streaming files.
BUFFER_SIZE: Final[int] = 8192


__all__: list = [var for var in globals().keys() if not var.startswith('_') and var != 'Final']
