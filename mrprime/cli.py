#!/usr/bin/env python3
# mrprime command line: test / find / bigprimes / pi / check / powmod
import sys, json, math, time, argparse

from . import config
from .log import log
from .miller_rabin import is_probable_prime, is_prime_u64
from .powmod import pow_mod
from .rng import Generator, CountingSource
from .search import find_prime, iter_big_primes, pi_table, sieve_mismatches

def _test_one(n: int, rounds: int, u64: bool) -> int:
    try:
        ok = is_prime_u64(n, rounds) if u64 else is_probable_prime(n, rounds)
    except OverflowError as e:
        print(f"{n}\terror\t{e}", file=sys.stderr); return 1
    print(f"{n}\t{'probable-prime' if ok else 'composite'}")
    return 0

def cmd_test(args) -> int:
    rc = 0
    if args.N:
        for n in args.N:
            rc |= _test_one(n, args.rounds, args.u64)
        return rc
    for line in sys.stdin:
        line = line.strip()
        if not line: continue
        try: n = int(line, 10)
        except ValueError:
            print(f"# skip: {line}", file=sys.stderr); rc |= 1; continue
        rc |= _test_one(n, args.rounds, args.u64)
    return rc

def cmd_find(args) -> int:
    gen = Generator()
    used = gen.seed(args.seed_bytes)
    t0 = time.perf_counter()
    p, iters = find_prime(args.bits, args.rounds, gen, return_iters=True)
    ms = (time.perf_counter() - t0) * 1000
    print(json.dumps({"bits": args.bits, "prime": str(p), "iters": iters,
                      "seed_bytes": used, "ms": round(ms, 3)}))
    return 0

def cmd_bigprimes(args) -> int:
    for bits, rounds, p in iter_big_primes(args.max_bits):
        print(f"Finding {bits}-bit prime w/{rounds} rounds ...", flush=True)
        print(p, end="\n\n", flush=True)
    return 0

def _plot_pi(rows, path: str):
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    xs = [n for n, _, _, _ in rows if n > 1]
    plt.figure(figsize=(7, 5))
    plt.loglog(xs, [c for n, c, _, _ in rows if n > 1], "o-", label="pi(n) (Miller-Rabin)")
    plt.loglog(xs, [n / math.log(n) for n in xs], "--", label="n / ln n")
    plt.xlabel("n"); plt.ylabel("primes below n")
    plt.title("Prime counting by brute-force Miller-Rabin")
    plt.legend()
    plt.tight_layout()
    plt.savefig(path)
    plt.close()

def cmd_pi(args) -> int:
    gen = Generator(source_factory=CountingSource)
    print(f"Calculating pi(n) with the Miller-Rabin test, k = {args.rounds}\n")
    rows, rc = [], 0
    for n, counted, expected, ms in pi_table(args.limit, args.rounds, gen):
        rows.append((n, counted, expected, ms))
        status = "" if counted == expected else f" --- FAIL, expected {expected}"
        if status: rc = 1
        print(f"There are {counted} primes less than {n}{status}", flush=True)
    calls = gen.source.calls if gen.source is not None else 0
    print(f"\nThe randomization function was called {calls} times")
    if args.plot:
        _plot_pi(rows, args.plot)
        log(f"PLOT path={args.plot}")
    return rc

def cmd_check(args) -> int:
    t0 = time.perf_counter()
    bad = list(sieve_mismatches(args.limit, args.rounds))
    ms = (time.perf_counter() - t0) * 1000
    print(json.dumps({"limit": args.limit, "rounds": args.rounds,
                      "mismatches": bad[:100], "count": len(bad), "ms": round(ms, 3)}))
    return 1 if bad else 0

def cmd_powmod(args) -> int:
    print(pow_mod(args.base, args.exponent, args.modulus))
    return 0

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="mrprime", description="Miller-Rabin primality tools")
    sub = ap.add_subparsers(dest="cmd", required=True)

    t = sub.add_parser("test", help="test integers (argv or stdin)")
    t.add_argument("N", nargs="*", type=int, help="optional list of integers")
    t.add_argument("-k", "--rounds", type=int, default=config.DEFAULT_ROUNDS)
    t.add_argument("--u64", action="store_true", help="use the fixed 64-bit arithmetic")
    t.set_defaults(func=cmd_test)

    f = sub.add_parser("find", help="random probable prime of BITS bits")
    f.add_argument("bits", type=int)
    f.add_argument("-k", "--rounds", type=int, default=None, help="default 1 + bits/2")
    f.add_argument("--seed-bytes", type=int, default=config.DEFAULT_SEED_BYTES,
                   help="entropy bytes for the seed (0 = current time)")
    f.set_defaults(func=cmd_find)

    b = sub.add_parser("bigprimes", help="primes of 1, 2, 4, 8, ... bits")
    b.add_argument("--max-bits", type=int, default=None, help="stop after this size")
    b.set_defaults(func=cmd_bigprimes)

    p = sub.add_parser("pi", help="count primes below 10^j by brute force")
    p.add_argument("--limit", type=int, default=10_000_000)
    p.add_argument("-k", "--rounds", type=int, default=config.U64_ROUNDS)
    p.add_argument("--plot", default=None, help="write a pi(n) plot to this file")
    p.set_defaults(func=cmd_pi)

    c = sub.add_parser("check", help="compare the tester with a sieve up to LIMIT")
    c.add_argument("--limit", type=int, default=10_000_000)
    c.add_argument("-k", "--rounds", type=int, default=config.DEFAULT_ROUNDS)
    c.set_defaults(func=cmd_check)

    m = sub.add_parser("powmod", help="BASE^EXP mod MOD")
    m.add_argument("base", type=int)
    m.add_argument("exponent", type=int)
    m.add_argument("modulus", type=int)
    m.set_defaults(func=cmd_powmod)
    return ap

def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

if __name__ == "__main__":
    raise SystemExit(main())
