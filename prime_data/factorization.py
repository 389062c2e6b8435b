"""
Factorization utilities.

Responsibility: prime-power decomposition, cleanly separated from
sieving. A PrimeSet's primes can be supplied as an accelerant; without
them, trial division over the mod-30 wheel does all the work.
"""

import math
import operator
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from .config import DEFAULTS
from .errors import InvalidInput, InvalidRange, NotEnoughData
from .primes import is_prime
from .wheel import coprime_candidates

# (prime, exponent)
Factor = Tuple[int, int]


def _check_positive(n: int) -> int:
    n = operator.index(n)
    if n <= 0:
        raise InvalidInput(f"{n} has no prime factorization")
    return n


def _divide_out(n: int, p: int) -> Tuple[int, int]:
    """Return (n with every factor p removed, multiplicity of p)."""
    exponent = 0
    while n % p == 0:
        n //= p
        exponent += 1
    return n, exponent


def trial_division(n: int, start: int = 2) -> List[Factor]:
    """
    Factor n by trial division, trying no divisor below start.

    Parameters
    ----------
    n : int
        Positive integer to factor.
    start : int
        Smallest divisor to try. The caller must already have removed
        every prime factor below start.

    Returns
    -------
    list
        (prime, exponent) pairs, ascending by prime.
    """
    factors = []
    for p in (2, 3, 5):
        if p >= start:
            n, e = _divide_out(n, p)
            if e:
                factors.append((p, e))

    # Composite wheel divisors never divide: their prime factors are gone
    for d in coprime_candidates(max(start, 7)):
        if d * d > n:
            break
        n, e = _divide_out(n, d)
        if e:
            factors.append((d, e))

    if n > 1:
        factors.append((n, 1))
    return factors


def spf_sieve(N: int) -> np.ndarray:
    """
    Compute smallest prime factor for all integers up to N.

    Parameters
    ----------
    N : int
        Upper bound (inclusive), N >= 1.

    Returns
    -------
    np.ndarray
        Array where spf[i] is the smallest prime factor of i.
        spf[0] = 0, spf[1] = 1, and spf[p] = p for primes.
    """
    if N < 1:
        raise InvalidRange(0, N, "an SPF table needs N >= 1")

    spf = np.arange(N + 1, dtype=np.int64)
    for p in range(2, math.isqrt(N) + 1):
        if spf[p] == p:  # p is prime
            multiples = spf[p*p::p]
            unmarked = multiples == np.arange(p * p, N + 1, p)
            multiples[unmarked] = p
    return spf


class Factorization:
    """
    Prime-power decomposition of a positive integer.

    Immutable. ``as_tuples()`` is ascending by prime, every exponent is
    at least 1, and the product of ``p**e`` over it is the original
    number. 1 factorizes to no pairs at all.
    """

    __slots__ = ('_n', '_factors')

    def __init__(self, factors: Iterable[Factor]):
        """
        Build from (prime, exponent) pairs in any order.

        Repeated primes are merged and zero exponents dropped.

        Raises
        ------
        InvalidInput
            A base is not prime or an exponent is negative.
        """
        factors = [(operator.index(p), operator.index(e)) for p, e in factors]
        for p, e in factors:
            if e < 0:
                raise InvalidInput(f"negative exponent {e} for {p}")
            if not is_prime(p):
                raise InvalidInput(f"{p} is not a prime factor")
        self._set_factors(factors)

    @classmethod
    def _from_factors(cls, factors: Iterable[Factor]) -> 'Factorization':
        """Build from pairs already known to have prime bases."""
        factorization = cls.__new__(cls)
        factorization._set_factors(factors)
        return factorization

    def _set_factors(self, factors: Iterable[Factor]) -> None:
        merged: Dict[int, int] = {}
        for p, e in factors:
            if e:
                merged[int(p)] = merged.get(int(p), 0) + int(e)
        self._factors = tuple(sorted(merged.items()))
        self._n = math.prod(p**e for p, e in self._factors)

    @classmethod
    def from_int(cls, n: int) -> 'Factorization':
        """
        Factorize n from scratch by trial division.

        Slower than going through a PrimeSet, but needs nothing else.

        Raises
        ------
        InvalidInput
            n <= 0.
        """
        return cls._from_factors(trial_division(_check_positive(n)))

    @classmethod
    def from_spf(cls, n: int, spf: np.ndarray) -> 'Factorization':
        """
        Factorize n by repeated smallest-prime-factor lookups.

        Parameters
        ----------
        n : int
            Integer to factor, 1 <= n < len(spf).
        spf : np.ndarray
            Smallest prime factor array from spf_sieve (spf[p] = p).
        """
        n = _check_positive(n)
        if n >= len(spf):
            raise NotEnoughData((len(spf), n), action='factorize')

        factors = []
        while n > 1:
            p = int(spf[n])
            factors.append((p, 1))
            n //= p
        return cls._from_factors(factors)

    @classmethod
    def from_primes(cls, n: int, primes: np.ndarray, data_range: Tuple[int, int],
                    allow_fallback: Optional[bool] = None) -> 'Factorization':
        """
        Factorize n using known primes first.

        Parameters
        ----------
        n : int
            Positive integer to factor.
        primes : np.ndarray
            Ascending primes, exactly those of data_range.
        data_range : tuple
            (low, high) the primes were generated for.
        allow_fallback : bool, optional
            Finish with trial division when the primes cannot prove the
            remaining cofactor prime. Defaults to DEFAULTS['allow_fallback'].

        Raises
        ------
        InvalidInput
            n <= 0.
        NotEnoughData
            Fallback disabled and the cofactor needs primes outside the data.
        """
        n = _check_positive(n)
        if allow_fallback is None:
            allow_fallback = DEFAULTS['allow_fallback']

        low, high = data_range
        # Every prime up to high is known only when the data starts at 2
        contiguous = low <= 2

        factors = []
        remaining = n
        for p in primes:
            p = int(p)
            if p > remaining or (contiguous and p * p > remaining):
                break
            remaining, e = _divide_out(remaining, p)
            if e:
                factors.append((p, e))

        if remaining == 1:
            return cls._from_factors(factors)

        if contiguous and high * high >= remaining:
            factors.append((remaining, 1))
            return cls._from_factors(factors)

        if not allow_fallback:
            first_missing = high + 1 if contiguous else 2
            raise NotEnoughData((first_missing, math.isqrt(remaining)),
                                action='factorize')

        start = high + 1 if contiguous else 2
        return cls._from_factors(factors + trial_division(remaining, start))

    def as_int(self) -> int:
        """Recompute the original number from its factors."""
        return self._n

    def __int__(self) -> int:
        return self._n

    def as_tuples(self) -> List[Factor]:
        """(prime, exponent) pairs, ascending by prime. Empty for 1."""
        return list(self._factors)

    def all_factors(self) -> List[int]:
        """
        Every positive divisor, ascending, including 1 and the number itself.

        Built from the Cartesian product of {p^0, ..., p^e} over all
        pairs, so there are prod(e_i + 1) of them.
        """
        divisors = [1]
        for p, e in self._factors:
            powers = [p**k for k in range(e + 1)]
            divisors = [d * q for q in powers for d in divisors]
        return sorted(divisors)

    def distinct_prime_count(self) -> int:
        """omega(n): number of distinct prime factors."""
        return len(self._factors)

    def prime_count(self) -> int:
        """Omega(n): number of prime factors with multiplicity."""
        return sum(e for _, e in self._factors)

    def is_prime(self) -> bool:
        return len(self._factors) == 1 and self._factors[0][1] == 1

    def __eq__(self, other) -> bool:
        if not isinstance(other, Factorization):
            return NotImplemented
        return self._factors == other._factors

    def __hash__(self) -> int:
        return hash(self._factors)

    def __str__(self) -> str:
        if not self._factors:
            return '1'
        return ' * '.join(f"{p}^{e}" if e > 1 else str(p) for p, e in self._factors)

    def __repr__(self) -> str:
        return f"Factorization({self._n} = {self})"


def all_factors_of(n: int) -> List[int]:
    """
    Every positive divisor of n, ascending.

    Shortcut for ``Factorization.from_int(n).all_factors()``.
    """
    return Factorization.from_int(n).all_factors()
