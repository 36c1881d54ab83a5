# ==================================================
# examples/build_table.py
# ==================================================
import argparse, logging
from static_perfect_hash import build

def main():
    p = argparse.ArgumentParser()
    p.add_argument("keys", help="text file, one key per line")
    p.add_argument("--max-seed", type=int, default=None)
    p.add_argument("-v", "--verbose", action="store_true")
    args = p.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    with open(args.keys, encoding="utf-8") as f:
        keys = [line.rstrip("\n") for line in f if line.strip()]

    table = build(keys, max_seed=args.max_seed)
    for k in keys:
        print(f"{k}\t{table.query(k)}")

if __name__ == "__main__":
    main()
