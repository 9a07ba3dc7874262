import argparse
import statistics
import time

from drakonis import PolicyStore, decide


def gen_policy(n: int) -> PolicyStore:
    roles = {}
    for i in range(n):
        roles[f"role_{i}"] = {
            "doc": {"read": (lambda k: lambda user, doc: doc == k)(i), "delete": False}
        }
    return PolicyStore(roles)


def run(size: int, iters: int):
    store = gen_policy(size)
    # worst case: every role is consulted and only the last one grants
    caller = {"id": "u", "roles": [f"role_{i}" for i in range(size)]}
    lat = []
    allowed = False
    for _ in range(iters):
        t0 = time.perf_counter()
        allowed = decide(store, caller, "doc", "read", size - 1)
        lat.append((time.perf_counter() - t0) * 1000.0)
    return {
        "p50": statistics.median(lat),
        "avg": sum(lat) / len(lat),
        "p90": percentile(lat, 90),
        "allowed": allowed,
    }


def percentile(arr, p):
    arr2 = sorted(arr)
    k = int(round((p / 100.0) * (len(arr2) - 1)))
    return arr2[k]


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--sizes", type=int, nargs="+", default=[1, 10, 50, 100, 500])
    ap.add_argument("--iters", type=int, default=200)
    args = ap.parse_args()
    print("roles,avg_ms,p50_ms,p90_ms,allowed")
    for s in args.sizes:
        r = run(s, args.iters)
        print(f"{s},{r['avg']:.3f},{r['p50']:.3f},{r['p90']:.3f},{r['allowed']}")


if __name__ == "__main__":
    main()
