import time

from mrprime import Generator, find_prime, is_probable_prime
from mrprime.log import log
from mrprime.search import rounds_for_bits

# ---- Public RQ job -----------------------------------------------------------

def find_prime_job(bits, rounds=None, seed_bytes=None):
    """
    Long-running prime search for the queue:
      1) fresh generator seeded from the entropy source
      2) prescreen + full Miller-Rabin rounds on random `bits`-bit candidates
      3) one more full pass over the winner
    Returns: dict with prime (decimal string), bits, rounds, iters, ms, recheck
    """
    bits = int(bits)
    rounds = int(rounds) if rounds is not None else rounds_for_bits(bits)
    gen = Generator()
    used = gen.seed(seed_bytes)
    log(f"JOB_START find_prime bits={bits} rounds={rounds} seed_bytes={used}")
    t0 = time.perf_counter()
    p, iters = find_prime(bits, rounds, gen, return_iters=True)
    ms = round((time.perf_counter() - t0) * 1000, 3)
    checked = is_probable_prime(p, rounds, gen)
    log(f"JOB_DONE find_prime bits={bits} iters={iters} ms={ms} recheck={checked}")
    return {"prime": str(p), "bits": p.bit_length(), "rounds": rounds,
            "iters": iters, "ms": ms, "recheck": checked}
