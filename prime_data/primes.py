"""
Prime generation utilities.

Responsibility: flat sieve and the single-number primality test.
No segmenting, no factorization.
"""

import math
import operator

import numpy as np


def prime_flags_upto(N: int) -> np.ndarray:
    """
    Return boolean array where flags[i] is True iff i is prime.

    Uses Sieve of Eratosthenes.

    Parameters
    ----------
    N : int
        Upper bound (inclusive). N < 0 gives an empty array.

    Returns
    -------
    np.ndarray
        Boolean array of length N+1.
    """
    flags = np.ones(max(N, 1) + 1, dtype=bool)
    flags[0] = flags[1] = False
    for p in range(2, math.isqrt(N) + 1 if N > 0 else 0):
        if flags[p]:
            flags[p*p::p] = False
    return flags[:max(N + 1, 0)]


def primes_upto(N: int) -> np.ndarray:
    """
    Return array of all primes <= N.

    Parameters
    ----------
    N : int
        Upper bound (inclusive).

    Returns
    -------
    np.ndarray
        Ascending int64 array of primes.
    """
    flags = prime_flags_upto(N)
    return np.nonzero(flags)[0].astype(np.int64)


def is_prime(n: int) -> bool:
    """
    Deterministic primality test for a single integer.

    Trial division by 2 and 3, then by 6k-1 and 6k+1 up to isqrt(n).
    Needs no precomputed data. Every n < 2 (0, 1, negatives) is not prime.

    Parameters
    ----------
    n : int
        Integer to test.

    Returns
    -------
    bool
    """
    n = operator.index(n)
    if n < 2:
        return False
    if n < 4:
        return True
    if n % 2 == 0 or n % 3 == 0:
        return False

    limit = math.isqrt(n)
    k = 5
    while k <= limit:
        if n % k == 0 or n % (k + 2) == 0:
            return False
        k += 6
    return True
