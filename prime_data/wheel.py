"""
Mod-30 wheel for integers coprime with 2, 3 and 5.

Instead of visiting every integer, trial division only needs the 8
residues mod 30 that share no factor with 30. Every prime > 5 is on the
wheel, so 8/30 of the candidates are visited.

Wheel layout:
- Turn t, spoke j  → 30t + K_VALUES[j]
- K_VALUES = (1, 7, 11, 13, 17, 19, 23, 29)

Reverse (n → position of the first wheel integer >= n):
- t = n // 30, j = first spoke with K_VALUES[j] >= n % 30
- if no such spoke, roll over to (t + 1, 0)

For n=7:  (0, 1) → 7 ✓
For n=8:  (0, 2) → 11 ✓
For n=30: (1, 0) → 31 ✓
For n=29: (0, 7) → 29 ✓
"""

import bisect
from typing import Iterator, Tuple

WHEEL = 30
K_VALUES = (1, 7, 11, 13, 17, 19, 23, 29)


def position(n: int) -> Tuple[int, int]:
    """Return (turn, spoke) of the first wheel integer >= n."""
    turn, r = divmod(max(n, 0), WHEEL)
    spoke = bisect.bisect_left(K_VALUES, r)
    if spoke == len(K_VALUES):
        return turn + 1, 0
    return turn, spoke


def is_coprime(n: int) -> bool:
    """True iff n shares no factor with 30."""
    return n % WHEEL in K_VALUES


def coprime_candidates(start: int) -> Iterator[int]:
    """
    Yield every integer >= start coprime with 30, ascending, forever.

    Parameters
    ----------
    start : int
        Lower bound (inclusive). Negative values start at 1.

    Yields
    ------
    int
        30t + K_VALUES[j] for consecutive wheel positions.
    """
    turn, spoke = position(start)
    base = WHEEL * turn
    while True:
        yield base + K_VALUES[spoke]
        spoke += 1
        if spoke == len(K_VALUES):
            spoke = 0
            base += WHEEL


def coprimes(low: int, high: int) -> Iterator[int]:
    """Yield integers in [low, high] coprime with 30, ascending."""
    for n in coprime_candidates(low):
        if n > high:
            return
        yield n
