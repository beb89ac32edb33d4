from __future__ import annotations

from .arith import BIG

def powmod_raw(a, x, n, arith=BIG):
    """a^x mod n on already-coerced operands; returns a backend integer.

    Right-to-left binary method: square a, multiply into r on set bits.
    """
    r = arith.coerce(1) % n
    a = a % n
    while x > 0:
        if arith.is_odd(x):
            r = arith.mulmod(r, a, n)
        x = arith.halve(x)
        a = arith.mulmod(a, a, n)
    return r

def pow_mod(base: int, exponent: int, modulus: int, arith=None) -> int:
    """Return base^exponent mod modulus, with 0 <= result < modulus."""
    if exponent < 0:
        raise ValueError("exponent must be >= 0")
    if modulus <= 0:
        raise ValueError("modulus must be > 0")
    arith = arith or BIG
    r = powmod_raw(arith.coerce(int(base) % int(modulus)),
                   arith.coerce(exponent),
                   arith.coerce(modulus),
                   arith)
    return int(r)
