"""
Prime data over a closed range.

Responsibility: own the primes of [low, high] and answer membership,
counting and iteration queries against them. Generation is delegated to
the segmented sieve, decomposition to factorization.py.

Queries use closed ranges too. A query that only partly overlaps the
data is clipped to the overlap; one that misses it entirely raises
OutOfBounds. An empty query (low > high) has no primes.
"""

import math
import operator
from typing import Iterator, Optional, Tuple

import numpy as np

from .config import DEFAULTS
from .errors import InvalidRange, NotEnoughData, OutOfBounds
from .factorization import Factorization
from .segmented_sieve import sieve_range

# Primes are stored as int64
MAX_HIGH = 2**63 - 1


def _check_range(low: int, high: int,
                 max_range_size: Optional[int] = None) -> Tuple[int, int]:
    low, high = operator.index(low), operator.index(high)
    if max_range_size is None:
        max_range_size = DEFAULTS['max_range_size']

    if low < 0:
        raise InvalidRange(low, high, "bounds must be non-negative")
    if low > high:
        raise InvalidRange(low, high, "low is greater than high")
    if high > MAX_HIGH:
        raise InvalidRange(low, high, f"high exceeds {MAX_HIGH}")
    if high - low + 1 > max_range_size:
        raise InvalidRange(low, high,
                           f"{high - low + 1} integers exceed the limit of {max_range_size}")
    if math.isqrt(high) + 1 > max_range_size:
        raise InvalidRange(low, high,
                           f"seed sieve up to {math.isqrt(high)} exceeds the limit of {max_range_size}")
    return low, high


class PrimeIter:
    """
    Restartable view over a slice of a PrimeSet's primes.

    Holds only the shared read-only array and [start, stop) indices, so
    every ``iter()`` starts again from the first prime.
    """

    __slots__ = ('_primes', '_start', '_stop')

    def __init__(self, primes: np.ndarray, start: int, stop: int):
        self._primes = primes
        self._start = start
        self._stop = stop

    def __iter__(self) -> Iterator[int]:
        for p in self._primes[self._start:self._stop]:
            yield int(p)

    def __len__(self) -> int:
        return self._stop - self._start

    def to_array(self) -> np.ndarray:
        """Read-only numpy view of the primes."""
        return self._primes[self._start:self._stop]

    def __repr__(self) -> str:
        return f"PrimeIter({len(self)} primes)"


class PrimeSet:
    """
    Every prime in a closed range [low, high], ascending, each once.

    Build with ``PrimeSet.generate(low, high)`` (or ``expand`` from an
    existing set). Immutable afterwards and safe to share read-only.
    """

    __slots__ = ('_low', '_high', '_primes')

    def __init__(self, low: int, high: int, primes: np.ndarray):
        primes = np.asarray(primes, dtype=np.int64)
        if primes.flags.writeable:
            # Freeze a private copy, never the caller's buffer
            primes = primes.copy()
            primes.setflags(write=False)
        self._low = low
        self._high = high
        self._primes = primes

    @classmethod
    def generate(cls, low: int, high: int, segment_size: Optional[int] = None,
                 num_workers: Optional[int] = None,
                 max_range_size: Optional[int] = None,
                 verbose: Optional[bool] = None) -> 'PrimeSet':
        """
        Sieve every prime in [low, high].

        Parameters
        ----------
        low, high : int
            Closed range, 0 <= low <= high.
        segment_size : int, optional
            Integers per sieve segment.
        num_workers : int, optional
            Worker processes for the segments.
        max_range_size : int, optional
            Largest accepted high - low + 1.
        verbose : bool, optional
            Print progress.

        Unset options take their value from DEFAULTS.

        Raises
        ------
        InvalidRange
            Negative or reversed bounds, or a range too large to sieve.
        """
        low, high = _check_range(low, high, max_range_size)
        if verbose is None:
            verbose = DEFAULTS['verbose']
        if verbose:
            print(f"  Generating primes in [{low:,}, {high:,}]")

        primes = sieve_range(
            low, high,
            segment_size=segment_size,
            num_workers=num_workers or DEFAULTS['num_workers'],
            verbose=verbose,
        )
        primes.setflags(write=False)
        return cls(low, high, primes)

    def expand(self, low: int, high: int, segment_size: Optional[int] = None,
               max_range_size: Optional[int] = None) -> 'PrimeSet':
        """
        Generate a new PrimeSet for [low, high] seeded with these primes.

        Skips the seed sieve. Requires this set to hold every prime up to
        isqrt(high).

        Raises
        ------
        InvalidRange
            As for generate.
        NotEnoughData
            This set does not cover [2, isqrt(high)].
        """
        low, high = _check_range(low, high, max_range_size)
        root = math.isqrt(high)

        if root >= 2:
            if self._low > 2:
                raise NotEnoughData((2, min(self._low - 1, root)), action='expand')
            if self._high < root:
                raise NotEnoughData((self._high + 1, root), action='expand')

        seeds = self._primes[:int(np.searchsorted(self._primes, root, side='right'))]
        primes = sieve_range(low, high, seeds=seeds, segment_size=segment_size)
        primes.setflags(write=False)
        return PrimeSet(low, high, primes)

    @property
    def low(self) -> int:
        return self._low

    @property
    def high(self) -> int:
        return self._high

    @property
    def range(self) -> Tuple[int, int]:
        """(low, high), inclusive."""
        return self._low, self._high

    def _clip(self, low: int, high: int) -> Optional[Tuple[int, int]]:
        low, high = operator.index(low), operator.index(high)
        if low > high:
            return None
        if high < self._low or low > self._high:
            raise OutOfBounds((low, high), self.range)
        return max(low, self._low), min(high, self._high)

    def _index_bounds(self, low: int, high: int) -> Tuple[int, int]:
        """[start, stop) indices of the primes in [low, high]."""
        clipped = self._clip(low, high)
        if clipped is None:
            return 0, 0
        lo, hi = clipped
        start = int(np.searchsorted(self._primes, lo, side='left'))
        stop = int(np.searchsorted(self._primes, hi, side='right'))
        return start, stop

    def iter_all(self) -> PrimeIter:
        """All primes of the set, ascending."""
        return PrimeIter(self._primes, 0, len(self._primes))

    def iter(self, low: int, high: int) -> PrimeIter:
        """
        Primes in [low, high] that this set knows about, ascending.

        Raises
        ------
        OutOfBounds
            [low, high] does not intersect the data range.
        """
        return PrimeIter(self._primes, *self._index_bounds(low, high))

    def count_primes(self) -> int:
        """Number of primes in the whole set. O(1)."""
        return len(self._primes)

    def count_primes_in_range(self, low: int, high: int) -> int:
        """
        Number of primes in [low, high], by binary search.

        Raises
        ------
        OutOfBounds
            [low, high] does not intersect the data range.
        """
        start, stop = self._index_bounds(low, high)
        return stop - start

    def is_prime(self, x: int) -> bool:
        """
        Look x up in the data.

        Raises
        ------
        OutOfBounds
            x is outside [low, high].
        """
        x = operator.index(x)
        if not self._low <= x <= self._high:
            raise OutOfBounds(x, self.range)
        i = int(np.searchsorted(self._primes, x, side='left'))
        return i < len(self._primes) and int(self._primes[i]) == x

    def is_empty(self) -> bool:
        """True if the range holds no primes."""
        return len(self._primes) == 0

    def factorize(self, n: int, allow_fallback: Optional[bool] = None) -> Factorization:
        """
        Factorize n, trying this set's primes first.

        Falls back to trial division for cofactors the set cannot settle
        unless allow_fallback is False. See Factorization.from_primes.
        """
        return Factorization.from_primes(n, self._primes, self.range, allow_fallback)

    def __len__(self) -> int:
        return len(self._primes)

    def __iter__(self) -> Iterator[int]:
        return iter(self.iter_all())

    def __contains__(self, x) -> bool:
        try:
            return self.is_prime(x)
        except (OutOfBounds, TypeError):
            return False

    def __repr__(self) -> str:
        return f"PrimeSet(low={self._low}, high={self._high}, count={len(self._primes)})"


def generate(low: int, high: int, **kwargs) -> PrimeSet:
    """Shortcut for PrimeSet.generate."""
    return PrimeSet.generate(low, high, **kwargs)
