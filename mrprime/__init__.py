from .powmod import pow_mod
from .rng import Generator, seed, uniform, release_generator
from .miller_rabin import decompose, is_probable_prime, is_probable_prime_screened, is_prime_u64
from .search import find_prime, iter_big_primes, prime_pi

__all__ = [
    "pow_mod", "Generator", "seed", "uniform", "release_generator",
    "decompose", "is_probable_prime", "is_probable_prime_screened", "is_prime_u64",
    "find_prime", "iter_big_primes", "prime_pi",
]
