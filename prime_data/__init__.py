"""Prime generation, counting and factorization."""

from .errors import InvalidInput, InvalidRange, NotEnoughData, OutOfBounds, PrimeError
from .factorization import Factorization, all_factors_of, spf_sieve
from .prime_set import PrimeIter, PrimeSet, generate
from .primes import is_prime, prime_flags_upto, primes_upto
from .segmented_sieve import count_primes
from .wheel import K_VALUES, coprimes

__all__ = [
    'PrimeSet', 'PrimeIter', 'generate',
    'is_prime', 'count_primes', 'prime_flags_upto', 'primes_upto',
    'Factorization', 'all_factors_of', 'spf_sieve',
    'K_VALUES', 'coprimes',
    'PrimeError', 'InvalidRange', 'OutOfBounds', 'NotEnoughData', 'InvalidInput',
]
