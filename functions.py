
from __future__ import annotations

from typing import Callable

from constants import K1, ROUNDS


def rotl(x: int, n: int, w: int = 32) -> int:
    '''Rotate Left (circular left shift) operation'''
    return ((x << n) | (x >> (w - n))) & ((1 << w) - 1)


def choice(x: int, y: int, z: int) -> int:
    '''Choice
    _
    SHA-1 -> 0 <= t <= 19'''
    return (x & y) | (~x & z)

def parity(x: int, y: int, z: int) -> int:
    '''Parity
    _
    SHA-1 -> 20 <= t <= 39 and 60 <= t <= 79'''
    return x ^ y ^ z

def majority(x: int, y: int, z: int) -> int:
    '''Majority
    _
    SHA-1 -> 40 <= t <= 59'''
    return (x & y) | (x & z) | (y & z)


# Round function and constant for each group of twenty rounds.
_ROUND_TABLE: tuple = (
    (choice, K1[0]),
    (parity, K1[1]),
    (majority, K1[2]),
    (parity, K1[3]),
)


def round_function(t: int) -> tuple[Callable[[int, int, int], int], int]:
    '''Returns the pair (f, K) used by round t, 0 <= t <= 79'''
    if not 0 <= t < ROUNDS:
        raise ValueError(f'round index out of range: {t}')
    return _ROUND_TABLE[t // 20]



__all__: list = [
    "rotl", "choice", "parity", "majority", "round_function",
]
