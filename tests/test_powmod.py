import random

import pytest

from mrprime.arith import U64
from mrprime.powmod import pow_mod


def naive_pow_mod(base: int, exponent: int, modulus: int) -> int:
    r = 1
    for _ in range(exponent):
        r = r * base
    return r % modulus


def test_matches_naive_small() -> None:
    for base in range(-5, 12):
        for exponent in range(0, 12):
            for modulus in range(1, 15):
                assert pow_mod(base, exponent, modulus) == naive_pow_mod(base, exponent, modulus)


def test_modulus_one_is_zero() -> None:
    assert pow_mod(7, 0, 1) == 0
    assert pow_mod(7, 5, 1) == 0


def test_beyond_64_bits() -> None:
    m = 2**127 - 1
    assert pow_mod(3, m - 1, m) == 1
    assert pow_mod(2**100 + 7, 3, 2**89 + 1) == naive_pow_mod(2**100 + 7, 3, 2**89 + 1)

    rng = random.Random(7)
    for _ in range(50):
        a = rng.getrandbits(300)
        e = rng.getrandbits(200)
        n = rng.getrandbits(256) | 1
        r = pow_mod(a, e, n)
        assert r == pow(a, e, n)
        assert 0 <= r < n
        assert isinstance(r, int)


def test_word64_adapter() -> None:
    rng = random.Random(11)
    for _ in range(50):
        n = rng.randrange(2, 2**64)
        a = rng.randrange(0, 2**64)
        e = rng.randrange(0, 2**64)
        assert pow_mod(a, e, n, arith=U64) == pow(a, e, n)


def test_word64_rejects_wide_operands() -> None:
    with pytest.raises(OverflowError):
        pow_mod(3, 5, 2**64, arith=U64)
    with pytest.raises(OverflowError):
        pow_mod(3, 2**64, 97, arith=U64)


def test_invalid_arguments() -> None:
    with pytest.raises(ValueError):
        pow_mod(2, -1, 5)
    with pytest.raises(ValueError):
        pow_mod(2, 3, 0)
    with pytest.raises(ValueError):
        pow_mod(2, 3, -7)
