# tools/generate_puzzles.py
"""
Generate daily puzzles into a JSON archive.

Reads PATH if it exists, generates the NUM days starting at START (default:
today) that are not in it yet, and writes everything back.
"""
import argparse
from pathlib import Path

from colmena.archive import fill_archive, load_archive, save_archive
from colmena.pool import load_pool, set_default_pool
from colmena.puzzles import daily_puzzle, today_index


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Generate daily puzzles into puzzles.json")
    parser.add_argument("path", nargs="?", type=Path, default=Path("puzzles.json"),
                        help="Archive to read from, update and write to")
    parser.add_argument("-n", "--num", type=int, default=1, help="Number of puzzles to generate")
    parser.add_argument("--start", type=int, default=None, help="First day index (default: today)")
    parser.add_argument("--pool", type=Path, default=None, help="Compiled word pool to use")
    args = parser.parse_args(argv)

    if args.pool:
        set_default_pool(load_pool(args.pool))

    puzzles = load_archive(args.path)
    print(f"Loaded {len(puzzles)} puzzles from {args.path}")

    start = today_index() if args.start is None else args.start
    print(f"Generating {args.num} puzzles from day {start}")
    merged, generated, failed = fill_archive(puzzles, range(start, start + args.num), daily_puzzle)
    for day, kind in sorted(failed.items()):
        print(f"\tday {day}: {kind}")
    print(f"Generated {len(generated)} puzzles for a total of {len(merged)}")

    save_archive(args.path, merged)
    print(f"Wrote puzzles to {args.path}")
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
