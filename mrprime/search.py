from __future__ import annotations
import time
from typing import Iterator, Optional, Tuple

import numpy as np

from . import config
from .miller_rabin import is_probable_prime, is_probable_prime_screened
from .rng import Generator, default_generator

# pi(10^j) for j = 0..7
EXPECTED_PI = {1: 0, 10: 4, 100: 25, 1000: 168, 10_000: 1229,
               100_000: 9592, 1_000_000: 78498, 10_000_000: 664579}

def rounds_for_bits(bits: int) -> int:
    return 1 + bits // 2

# --- Random probable prime of exactly `bits` bits ---
def find_prime(bits: int, rounds: Optional[int] = None,
               generator: Optional[Generator] = None,
               prescreen: int = config.PRESCREEN_ROUNDS,
               return_iters: bool = False):
    """
    Draw from [2^(bits-1), 2^bits - 1] until a candidate survives `prescreen`
    rounds and then `rounds` rounds. Terminates almost surely; expected
    number of draws grows linearly with bits.
    """
    if bits < 1:
        raise ValueError("bits must be >= 1")
    if rounds is None:
        rounds = rounds_for_bits(bits)
    gen = generator or default_generator()
    lo = 1 << (bits - 1)
    hi = (1 << bits) - 1
    iters = 0
    while True:
        iters += 1
        candidate = gen.uniform(lo, hi)
        if is_probable_prime_screened(candidate, rounds, prescreen, gen):
            return (candidate, iters) if return_iters else candidate

def iter_big_primes(max_bits: Optional[int] = None,
                    generator: Optional[Generator] = None) -> Iterator[Tuple[int, int, int]]:
    """Yield (bits, rounds, prime) for bits = 1, 2, 4, 8, ..."""
    bits = 1
    while max_bits is None or bits <= max_bits:
        rounds = rounds_for_bits(bits)
        yield bits, rounds, find_prime(bits, rounds, generator)
        bits *= 2

# --- Brute-force prime counting (smoke test for the tester) ---
def prime_pi(n: int, rounds: int = config.U64_ROUNDS,
             generator: Optional[Generator] = None) -> int:
    """Number of m in [2, n) reported prime. Slow by construction."""
    gen = generator or default_generator()
    return sum(1 for m in range(2, n) if is_probable_prime(m, rounds, gen))

def sieve(limit: int) -> np.ndarray:
    """Boolean array, is_prime[i] for 0 <= i <= limit (Eratosthenes)."""
    flags = np.ones(max(limit + 1, 2), dtype=bool)
    flags[:2] = False
    for p in range(2, int(limit ** 0.5) + 1):
        if flags[p]:
            flags[p*p::p] = False
    return flags[:limit + 1]

def expected_pi(n: int) -> int:
    """Primes below n, from the table when possible, else sympy."""
    if n in EXPECTED_PI:
        return EXPECTED_PI[n]
    import sympy as sp
    return int(sp.primepi(n - 1)) if n > 1 else 0

def pi_table(limit: int = 10_000_000, rounds: int = config.U64_ROUNDS,
             generator: Optional[Generator] = None):
    """Yield (n, counted, expected, ms) for n = 1, 10, 100, ... <= limit."""
    n = 1
    while n <= limit:
        t0 = time.perf_counter()
        counted = prime_pi(n, rounds, generator)
        ms = (time.perf_counter() - t0) * 1000
        yield n, counted, expected_pi(n), round(ms, 3)
        n *= 10

def sieve_mismatches(limit: int, rounds: int = config.DEFAULT_ROUNDS,
                     generator: Optional[Generator] = None):
    """Yield every 2 <= n <= limit where the tester and the sieve disagree."""
    gen = generator or default_generator()
    flags = sieve(limit)
    for n in range(2, limit + 1):
        if is_probable_prime(n, rounds, gen) != bool(flags[n]):
            yield n
