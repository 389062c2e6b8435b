"""
Prime-counting estimates.

Responsibility: cheap bounds on pi(x) and on the nth prime, for when
sieving up to x would be too costly or when a sieve window has to be
sized before generating it.

Bounds used:
- pi(x) <= x / (ln x - 1.112)                        10^4 <= x < 10^5
- pi(x) <= x / (ln x - 1.100)                        10^5 <= x < 10^6
- pi(x) <= x/ln x * (1 + 1/ln x + 2.51/ln^2 x)       x >= 10^6 (Dusart)
- p_n ~ n (ln n + ln ln n - 1 + (ln ln n - 2)/ln n
           - (ln^2 ln n - 6 ln ln n + 11)/(2 ln^2 n))
"""

import math
import operator
from typing import Tuple

from .errors import InvalidInput
from .prime_set import PrimeSet
from .segmented_sieve import count_primes

# The 9999th prime: bounds window for every n < 10^4
SMALL_NTH_PRIME_HIGH = 104_723


def exact_count(bound: int) -> int:
    """Exact pi(bound). Same as count_primes."""
    return count_primes(bound)


def _offset_x_ln_x(x: int, offset: float) -> int:
    return int(x / (math.log(x) - offset))


def _dusart(x: int, a: float, b: float) -> int:
    ln_x = math.log(x)
    return int(x / ln_x * (1.0 + a / ln_x + b / (ln_x * ln_x)))


def upper_bound(bound: int) -> int:
    """
    Upper bound on the number of primes <= bound.

    Never below the true count. Relative error stays under 1.2%, and
    under 0.3% from 10^5 on.
    Exact for bound <= 10_000.
    """
    bound = operator.index(bound)
    if bound <= 10_000:
        return exact_count(bound)

    digits = int(math.log10(bound))
    if digits == 4:
        return _offset_x_ln_x(bound, 1.112)
    if digits == 5:
        return _offset_x_ln_x(bound, 1.100)
    return _dusart(bound, 1.00, 2.51)


def nth_prime_approximation(n: int) -> int:
    """
    Approximate the nth prime (1-based: the 1st prime is 2).

    Raises
    ------
    InvalidInput
        n < 1.
    """
    n = operator.index(n)
    if n < 1:
        raise InvalidInput(f"there is no prime number {n}", action='estimate')
    if n <= 3:
        return (2, 3, 5)[n - 1]

    x = float(n)
    log_n = math.log(x)
    loglog_n = math.log(log_n)
    log2_n = log_n * log_n
    log2_loglog_n = loglog_n * loglog_n

    term1 = (loglog_n - 2.0) / log_n
    term2 = (log2_loglog_n - 6.0 * loglog_n + 11.0) / (2.0 * log2_n)

    return int(x * (log_n + loglog_n - 1.0 + term1 - term2))


def nth_prime_bounds(n: int) -> Tuple[int, int]:
    """
    Closed range (low, high) around the nth prime.

    The approximation converges as n grows, so the relative window
    shrinks with the number of digits of n. Widths were checked against
    every prime up to 3 * 10^6; nth_prime still widens the window if it
    misses.
    """
    n = operator.index(n)
    if n < 1:
        raise InvalidInput(f"there is no prime number {n}", action='estimate')

    digits = int(math.log10(n))
    if digits < 4:
        return 0, SMALL_NTH_PRIME_HIGH

    approximation = nth_prime_approximation(n)
    relative_epsilon = {4: 2.0**-7, 5: 2.0**-9, 6: 2.0**-10, 7: 2.0**-12}.get(digits, 2.0**-13)
    epsilon = int(approximation * relative_epsilon)

    return approximation - epsilon, approximation + epsilon


def nth_prime(n: int) -> int:
    """
    The exact nth prime.

    Sieves only the nth_prime_bounds window, then counts the primes
    below it to locate n inside.
    """
    low, high = nth_prime_bounds(n)
    while True:
        window = PrimeSet.generate(low, high)
        index = n - count_primes(low - 1) - 1
        if 0 <= index < window.count_primes():
            return int(window.iter_all().to_array()[index])

        # Missed: grow the window on the side the prime lies
        width = high - low + 1
        if index < 0:
            low = max(0, low - width)
        else:
            high += width
