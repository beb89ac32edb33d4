"""
Integer arithmetic used by the Miller-Rabin engine.

The algorithm only needs a handful of operations (coerce, multiply-mod,
halve, parity); both backends expose them so pow_mod and the witness loop
are written once.

- MpzArith   : arbitrary precision, GMP integers via gmpy2
- Word64Arith: fixed-width adapter, operands must fit in `bits` bits
"""
from __future__ import annotations

import gmpy2
from gmpy2 import mpz


class MpzArith:
    name = "mpz"

    def coerce(self, x):
        return mpz(x)

    def mulmod(self, a, b, n):
        return a * b % n

    def halve(self, x):
        return x >> 1

    def is_odd(self, x) -> bool:
        return gmpy2.is_odd(x)


class Word64Arith:
    """Fixed-width integers. Python ints never wrap, so the product in
    mulmod is exact; the adapter only enforces the width on its operands."""

    def __init__(self, bits: int = 64):
        self.bits = bits
        self.limit = 1 << bits
        self.name = f"u{bits}"

    def coerce(self, x):
        x = int(x)
        if x < 0 or x >= self.limit:
            raise OverflowError(f"{x} does not fit in {self.bits} unsigned bits")
        return x

    def mulmod(self, a, b, n):
        return a * b % n

    def halve(self, x):
        return x >> 1

    def is_odd(self, x) -> bool:
        return x & 1 == 1


BIG = MpzArith()
U64 = Word64Arith(64)
