"""
Error taxonomy.

Responsibility: every failure a caller can act on is a PrimeError.
They subclass ValueError, so generic input validation still catches them.

Kinds:
- InvalidRange   malformed or oversized generation bounds
- OutOfBounds    a query that does not touch the data's own range
- NotEnoughData  primes beyond the available data are needed
- InvalidInput   semantically undefined input (factorizing 0)
"""

from typing import Optional, Tuple


class PrimeError(ValueError):
    """Base class. ``action`` names what was being attempted."""

    action = "read"

    def __init__(self, detail: str, action: Optional[str] = None):
        if action is not None:
            self.action = action
        self.detail = detail
        super().__init__(
            f"An error occurred when trying to {self.action} PrimeSet -> {detail}"
        )


class InvalidRange(PrimeError):
    action = "generate"

    def __init__(self, low: int, high: int, reason: str):
        self.low = low
        self.high = high
        super().__init__(f"invalid range [{low}, {high}]: {reason}")


class OutOfBounds(PrimeError):
    def __init__(self, value, data_range: Tuple[int, int],
                 action: Optional[str] = None):
        self.value = value
        self.data_range = data_range
        super().__init__(
            f"cannot access {value}, data covers "
            f"[{data_range[0]}, {data_range[1]}]",
            action,
        )


class NotEnoughData(PrimeError):
    def __init__(self, missing: Tuple[int, int], action: Optional[str] = None):
        self.missing = missing
        super().__init__(
            f"cannot access any data in the range [{missing[0]}, {missing[1]}]",
            action,
        )


class InvalidInput(PrimeError):
    action = "factorize"
