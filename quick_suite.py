#!/usr/bin/env python3
# quick_suite.py: check a running mrprime server against sympy
import csv, random, argparse
import requests
from sympy import nextprime, isprime

from mrprime import config

TIMEOUT = 15

def cases(seed: int = 42):
    rng = random.Random(seed)
    # Hand-picked sanity
    yield 97, True
    yield 91, False
    yield 561, False          # Carmichael
    yield 2**61 - 1, True
    yield (2**61 - 1) * (2**31 - 1), False

    for k in [2, 4, 8, 16, 32]:
        for _ in range(3):
            # next prime after a k-digit start below 10**k / 2 stays k digits
            p = int(nextprime(rng.randrange(10**(k-1), 10**k // 2)))
            yield p, True
            n = rng.randrange(10**(k-1), 10**k)
            yield n, bool(isprime(n))

def check(session, base: str, n: int, expect: bool, rounds: int) -> dict:
    r = session.post(f"{base}/api/is_prime", json={"n": str(n), "rounds": rounds}, timeout=TIMEOUT)
    r.raise_for_status()
    got = r.json().get("probable_prime")
    return {"n": str(n), "expect": expect, "got": got, "ok": got == expect}

def run(session, base: str, rounds: int = 20, seed: int = 42):
    results = []
    for n, expect in cases(seed):
        try:
            results.append(check(session, base, n, expect, rounds))
        except requests.RequestException as e:
            results.append({"n": str(n), "expect": expect, "got": None, "ok": False,
                            "reason": f"HTTP: {e}"})
    return results

def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--base", default=config.BASE_URL)
    ap.add_argument("-k", "--rounds", type=int, default=20)
    ap.add_argument("--out", default="quick_suite_failures.csv")
    args = ap.parse_args(argv)

    session = requests.Session()
    session.headers.update({"User-Agent": "mrprime-quick-suite"})
    results = run(session, args.base.rstrip("/"), args.rounds)

    fails = [r for r in results if not r["ok"]]
    print("\n=== QUICK SUITE SUMMARY ===")
    print(f"Total: {len(results)} | PASS: {len(results) - len(fails)} | FAIL: {len(fails)}")
    if fails:
        with open(args.out, "w", newline="") as f:
            w = csv.DictWriter(f, fieldnames=["n", "expect", "got", "ok", "reason"])
            w.writeheader()
            w.writerows(fails)
        print(f"Wrote failure details to {args.out}")
        return 1
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
