"""
Runtime configuration.

Responsibility: defaults for sieving and factorization, and loading
overrides from YAML. A config file only needs the keys it changes.
"""

from pathlib import Path
from typing import Optional, Union

import yaml

DEFAULTS = {
    # Largest [low, high] window generate() will allocate, in integers
    'max_range_size': 10**9,
    # Integers sieved per segment (one bool each)
    'segment_size': 2**20,
    # >1 spreads segments over a process pool
    'num_workers': 1,
    # Trial division when a PrimeSet cannot finish a factorization
    'allow_fallback': True,
    'verbose': False,
}

_POSITIVE_INTS = ('max_range_size', 'segment_size', 'num_workers')
_BOOLS = ('allow_fallback', 'verbose')


def load_config(path: Optional[Union[str, Path]] = None) -> dict:
    """
    Load a YAML config file on top of DEFAULTS.

    Parameters
    ----------
    path : str or Path, optional
        YAML file. None returns a copy of DEFAULTS.

    Returns
    -------
    dict
        Complete configuration.

    Raises
    ------
    ValueError
        Unknown keys, or values of the wrong type.
    """
    config = dict(DEFAULTS)
    if path is None:
        return config

    with open(path) as f:
        loaded = yaml.safe_load(f) or {}

    if not isinstance(loaded, dict):
        raise ValueError(f"{path}: expected a mapping, got {type(loaded).__name__}")

    unknown = sorted(set(loaded) - set(DEFAULTS))
    if unknown:
        raise ValueError(f"{path}: unknown config keys {unknown}")

    config.update(loaded)

    for key in _POSITIVE_INTS:
        value = config[key]
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ValueError(f"{path}: {key} must be a positive integer, got {value!r}")
    for key in _BOOLS:
        if not isinstance(config[key], bool):
            raise ValueError(f"{path}: {key} must be true or false, got {config[key]!r}")

    return config
