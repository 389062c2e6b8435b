"""
Segmented sieve of Eratosthenes.

Sieves an arbitrary window [low, high] without allocating [0, high]:
seed primes up to sqrt(high) come from a flat sieve, then the window is
struck one segment at a time. Segments are independent, so they can be
spread over a process pool.
"""

import math
import operator
from multiprocessing import Pool
from typing import Iterator, Optional, Tuple

import numpy as np

from .config import DEFAULTS
from .primes import primes_upto


def seed_primes(high: int) -> np.ndarray:
    """Primes up to isqrt(high): enough to strike every composite <= high."""
    return primes_upto(math.isqrt(max(high, 0)))


def segment_bounds(low: int, high: int,
                   segment_size: Optional[int] = None) -> Iterator[Tuple[int, int]]:
    """Yield half-open segments [start, end) covering [low, high]."""
    if segment_size is None:
        segment_size = DEFAULTS['segment_size']
    for start in range(low, high + 1, segment_size):
        yield start, min(start + segment_size, high + 1)


def _segment_flags(start: int, end: int, seeds: np.ndarray) -> np.ndarray:
    """
    Primality flags for the segment [start, end).

    flags[j] is True iff start + j is prime. seeds must hold every prime
    up to isqrt(end - 1).
    """
    flags = np.ones(end - start, dtype=bool)

    # 0 and 1 are not prime
    if start < 2:
        flags[:2 - start] = False

    for p in seeds:
        p = int(p)
        if p * p >= end:
            break

        # First multiple of p in [start, end), never below p^2
        first = max(p * p, ((start + p - 1) // p) * p)
        flags[first - start::p] = False

    return flags


def _process_segment(args: Tuple[int, int, np.ndarray]) -> np.ndarray:
    """Sieve one segment and return its primes as int64."""
    start, end, seeds = args
    flags = _segment_flags(start, end, seeds)
    return np.nonzero(flags)[0].astype(np.int64) + start


def sieve_range(low: int, high: int, seeds: Optional[np.ndarray] = None,
                segment_size: Optional[int] = None, num_workers: int = 1,
                verbose: bool = False) -> np.ndarray:
    """
    Return all primes in [low, high].

    Parameters
    ----------
    low, high : int
        Closed range, 0 <= low <= high.
    seeds : np.ndarray, optional
        Ascending primes covering [2, isqrt(high)]. Sieved here if omitted.
    segment_size : int, optional
        Integers per segment. Defaults to DEFAULTS['segment_size'].
    num_workers : int
        Number of worker processes. 1 sieves in-process.
    verbose : bool
        Print progress.

    Returns
    -------
    np.ndarray
        Ascending int64 array of primes.
    """
    if seeds is None:
        seeds = seed_primes(high)

    if verbose:
        print(f"    Found {len(seeds)} seed primes up to {math.isqrt(high)}")

    tasks = [(start, end, seeds)
             for start, end in segment_bounds(low, high, segment_size)]

    if verbose:
        print(f"    Processing {len(tasks)} segments with {num_workers} workers...")

    if num_workers > 1 and len(tasks) > 1:
        with Pool(num_workers) as pool:
            results = pool.map(_process_segment, tasks)
    else:
        results = [_process_segment(task) for task in tasks]

    if not results:
        return np.empty(0, dtype=np.int64)
    return np.concatenate(results)


def count_primes(n: int, segment_size: Optional[int] = None) -> int:
    """
    Count primes in [1, n] without building a PrimeSet.

    Only one segment of flags is alive at a time; nothing is kept
    between calls.

    Parameters
    ----------
    n : int
        Upper bound (inclusive).
    segment_size : int, optional
        Integers per segment.

    Returns
    -------
    int
        pi(n). 0 for n < 2.
    """
    n = operator.index(n)
    if n < 2:
        return 0

    seeds = seed_primes(n)
    total = 0
    for start, end in segment_bounds(0, n, segment_size):
        total += int(np.count_nonzero(_segment_flags(start, end, seeds)))
    return total
