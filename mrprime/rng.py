"""
Random integer source for witnesses and prime candidates.

A Generator owns one RandomSource (the PRNG strategy) plus the seeding
policy: entropy bytes from /dev/urandom folded MSB-first into one big seed,
falling back to the wall clock when the entropy file cannot be read.
Generators seed themselves lazily on first draw and can be released.

Generators carry no lock. The module-level seed/uniform/release_generator
functions work on a per-thread default generator, so threads never share
state unless they pass the same Generator around themselves.
"""
from __future__ import annotations

import random
import threading
import time
from typing import Callable, Optional, Protocol

import gmpy2

from . import config
from .log import log


# ---- PRNG strategies ----

class RandomSource(Protocol):
    def reseed(self, seed: int) -> None: ...
    def below(self, bound: int) -> int: ...


class GmpRandomSource:
    """GMP's default generator (Mersenne Twister), via gmpy2."""

    def __init__(self):
        self._state = gmpy2.random_state()

    def reseed(self, seed: int) -> None:
        self._state = gmpy2.random_state(gmpy2.mpz(seed))

    def below(self, bound: int) -> int:
        return int(gmpy2.mpz_random(self._state, gmpy2.mpz(bound)))


class PyRandomSource:
    """Python's random.Random; handy when gmpy2's stream must not be used."""

    def __init__(self):
        self._rng = random.Random()

    def reseed(self, seed: int) -> None:
        self._rng.seed(seed)

    def below(self, bound: int) -> int:
        return self._rng.randrange(bound)


class CountingSource:
    """Wraps another source and counts draws."""

    def __init__(self, inner: Optional[RandomSource] = None):
        self.inner = inner if inner is not None else GmpRandomSource()
        self.calls = 0

    def reseed(self, seed: int) -> None:
        self.inner.reseed(seed)

    def below(self, bound: int) -> int:
        self.calls += 1
        return self.inner.below(bound)


# ---- Generator ----

class Generator:
    def __init__(self,
                 source_factory: Callable[[], RandomSource] = GmpRandomSource,
                 entropy_path: Optional[str] = None,
                 default_seed_bytes: Optional[int] = None):
        self.source_factory = source_factory
        self.entropy_path = entropy_path or config.ENTROPY_SOURCE
        self.default_seed_bytes = (config.DEFAULT_SEED_BYTES
                                   if default_seed_bytes is None else default_seed_bytes)
        self.source: Optional[RandomSource] = None
        self.seed_used: Optional[int] = None

    @property
    def initialized(self) -> bool:
        return self.source is not None

    def _read_entropy(self, nbytes: int) -> Optional[bytes]:
        try:
            with open(self.entropy_path, "rb") as f:
                data = f.read(nbytes)
        except OSError as e:
            log(f"WARN entropy_unavailable path={self.entropy_path} err={e!r} fallback=time")
            return None
        if len(data) < nbytes:
            log(f"WARN entropy_short path={self.entropy_path} wanted={nbytes} got={len(data)} fallback=time")
            return None
        return data

    def seed_value(self, value: int) -> None:
        if self.source is None:
            self.source = self.source_factory()
        value = int(value)
        self.source.reseed(value)
        self.seed_used = value

    def seed_from_bytes(self, data: bytes) -> None:
        """Seed from a fixed byte string (most-significant byte first)."""
        self.seed_value(int.from_bytes(bytes(data), "big"))

    def seed(self, nbytes: Optional[int] = None) -> int:
        """Seed from the entropy source; returns entropy bytes consumed.

        nbytes == 0, or an unreadable entropy source, seeds from the
        current time and returns 0.
        """
        if nbytes is None:
            nbytes = self.default_seed_bytes
        if nbytes < 0:
            raise ValueError("nbytes must be >= 0")
        if nbytes > 0:
            data = self._read_entropy(nbytes)
            if data is not None:
                self.seed_from_bytes(data)
                return nbytes
        self.seed_value(int(time.time()))
        return 0

    def uniform(self, lowest: int, highest: int) -> int:
        """Uniform integer in the inclusive range [lowest, highest]."""
        if lowest > highest:
            raise ValueError(f"empty range: lowest={lowest} > highest={highest}")
        if lowest == highest:
            return int(lowest)
        if self.source is None:
            self.seed(self.default_seed_bytes)
        return int(lowest) + self.source.below(int(highest) - int(lowest) + 1)

    def release(self) -> None:
        self.source = None
        self.seed_used = None


# ---- per-thread default generator ----

_local = threading.local()

def default_generator() -> Generator:
    g = getattr(_local, "generator", None)
    if g is None:
        g = _local.generator = Generator()
    return g

def seed(entropy_bytes: int = config.DEFAULT_SEED_BYTES) -> int:
    return default_generator().seed(entropy_bytes)

def uniform(lowest: int, highest: int) -> int:
    return default_generator().uniform(lowest, highest)

def release_generator() -> None:
    default_generator().release()
