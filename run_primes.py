#!/usr/bin/env python3
"""
Command-line front end for prime_data.

Usage:
    python run_primes.py list 100 200
    python run_primes.py count 1000000
    python run_primes.py is-prime 65537
    python run_primes.py factor 43560 --divisors
    python run_primes.py factor 221 --data 12
    python run_primes.py estimate 10000000
    python run_primes.py --config config/default.yaml --verbose list 0 1000
"""

import argparse
import sys
import time

from prime_data.config import load_config
from prime_data.errors import PrimeError
from prime_data.estimate import nth_prime_bounds, upper_bound
from prime_data.factorization import Factorization
from prime_data.prime_set import PrimeSet
from prime_data.primes import is_prime
from prime_data.segmented_sieve import count_primes


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Generate, count and factor primes')
    parser.add_argument('--config', type=str, default=None,
                        help='Path to YAML config file')
    parser.add_argument('--verbose', action='store_true',
                        help='Print progress while sieving')

    sub = parser.add_subparsers(dest='command', required=True)

    p_list = sub.add_parser('list', help='List primes in [LOW, HIGH]')
    p_list.add_argument('low', type=int)
    p_list.add_argument('high', type=int)

    p_count = sub.add_parser('count', help='Count primes in [1, N]')
    p_count.add_argument('n', type=int)

    p_is_prime = sub.add_parser('is-prime', help='Test N for primality')
    p_is_prime.add_argument('n', type=int)

    p_factor = sub.add_parser('factor', help='Prime factorization of N')
    p_factor.add_argument('n', type=int)
    p_factor.add_argument('--divisors', action='store_true',
                          help='Also list every divisor')
    p_factor.add_argument('--data', type=int, default=None, metavar='HIGH',
                          help='Factor with primes sieved up to HIGH first')

    p_estimate = sub.add_parser('estimate', help='Bounds on pi(N) and the Nth prime')
    p_estimate.add_argument('n', type=int)

    return parser


def run(args: argparse.Namespace, config: dict) -> None:
    verbose = args.verbose or config['verbose']

    if args.command == 'list':
        start = time.time()
        data = PrimeSet.generate(
            args.low, args.high,
            segment_size=config['segment_size'],
            num_workers=config['num_workers'],
            max_range_size=config['max_range_size'],
            verbose=verbose,
        )
        if verbose:
            print(f"  Completed in {time.time() - start:.1f}s")
        print(f"{data.count_primes()} primes in [{data.low}, {data.high}]:")
        print(' '.join(str(p) for p in data.iter_all()))

    elif args.command == 'count':
        print(count_primes(args.n, segment_size=config['segment_size']))

    elif args.command == 'is-prime':
        verdict = 'is prime' if is_prime(args.n) else 'is not prime'
        print(f"{args.n} {verdict}")

    elif args.command == 'factor':
        if args.data is None:
            factorization = Factorization.from_int(args.n)
        else:
            data = PrimeSet.generate(
                0, args.data,
                segment_size=config['segment_size'],
                num_workers=config['num_workers'],
                max_range_size=config['max_range_size'],
                verbose=verbose,
            )
            factorization = data.factorize(args.n, allow_fallback=config['allow_fallback'])
        print(f"{factorization.as_int()} = {factorization}")
        if args.divisors:
            divisors = factorization.all_factors()
            print(f"Divisors ({len(divisors)}): {' '.join(map(str, divisors))}")

    elif args.command == 'estimate':
        print(f"pi({args.n}) <= {upper_bound(args.n)}")
        low, high = nth_prime_bounds(args.n)
        print(f"prime #{args.n} lies in [{low}, {high}]")


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        run(args, config)
    except PrimeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == '__main__':
    sys.exit(main())
