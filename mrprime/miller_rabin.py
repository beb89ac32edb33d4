# mrprime/miller_rabin.py
# Miller–Rabin probabilistic primality test
# - sign-blind: tests |n|
# - 1, 2 and 3 are reported prime (1 included for compatibility)
# - "False" is always right; "True" is wrong with probability <= 4^-rounds

from __future__ import annotations
from typing import Optional, Tuple

from . import config
from .arith import BIG, U64
from .powmod import powmod_raw
from .rng import Generator, default_generator

DEFAULT_ROUNDS = config.DEFAULT_ROUNDS

def decompose(n: int) -> Tuple[int, int]:
    """Write n-1 as d * 2^s with d odd (n > 1)."""
    if n <= 1:
        raise ValueError("n must be > 1")
    d, s = n - 1, 0
    while d & 1 == 0:
        d >>= 1
        s += 1
    return d, s

def _witness_passes(a, d, s: int, n, arith) -> bool:
    """One round for witness a. False means n is definitely composite."""
    x = powmod_raw(a, d, n, arith)
    if x == 1 or x == n - 1:
        return True
    for _ in range(s - 1):
        x = arith.mulmod(x, x, n)
        if x == 1:
            return False
        if x == n - 1:
            return True
    return False

def is_probable_prime(n: int, rounds: int = DEFAULT_ROUNDS,
                      generator: Optional[Generator] = None, arith=None) -> bool:
    if rounds < 1:
        raise ValueError("rounds must be >= 1")
    n = abs(int(n))
    if n in (1, 2, 3):
        return True
    if n == 0 or n & 1 == 0:
        return False

    arith = arith or BIG
    gen = generator or default_generator()
    d, s = decompose(n)
    n_, d_ = arith.coerce(n), arith.coerce(d)
    for _ in range(rounds):
        a = arith.coerce(gen.uniform(2, n - 2))
        if not _witness_passes(a, d_, s, n_, arith):
            return False
    return True

def is_probable_prime_screened(n: int, rounds: int = DEFAULT_ROUNDS,
                               prescreen: int = config.PRESCREEN_ROUNDS,
                               generator: Optional[Generator] = None, arith=None) -> bool:
    """Cheap prescreen rounds first, full rounds only for survivors."""
    if 0 < prescreen < rounds:
        if not is_probable_prime(n, prescreen, generator, arith):
            return False
    return is_probable_prime(n, rounds, generator, arith)

def is_prime_u64(n: int, rounds: int = config.U64_ROUNDS,
                 generator: Optional[Generator] = None) -> bool:
    """Same test over fixed 64-bit arithmetic; n must satisfy 0 <= n < 2^64."""
    U64.coerce(n)
    return is_probable_prime(n, rounds, generator, U64)
