#!/usr/bin/env python3
"""Compute the topological entropy of a braid from the command line.

Usage:
    python scripts/braid_entropy_cli.py 1 -2
    python scripts/braid_entropy_cli.py 1 2 -3 --n 4 --length intaxis --json
    python scripts/braid_entropy_cli.py 1 -2 --tol 0 --maxit 10 -v -v
    python scripts/braid_entropy_cli.py 1 -2 --set entropy.maxit_margin=60
"""
import argparse
import json
import logging
import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from braid_entropy import DEFAULT_SETTINGS, BraidEntropyError, entropy


def _setting(text):
    """Parse ``KEY=VALUE`` into ``(key, int or float)``."""
    key, sep, raw = text.partition("=")
    key = key.strip()
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {text!r}")
    try:
        value = int(raw)
    except ValueError:
        try:
            value = float(raw)
        except ValueError:
            raise argparse.ArgumentTypeError(
                f"setting {key!r} needs a number, got {raw!r}")
    return key, value


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Topological entropy of a braid (iterative method).")
    p.add_argument("word", nargs="*", type=int,
                   help="generators: i for sigma_i, -i for its inverse")
    p.add_argument("--n", type=int, default=None,
                   help="number of strands (default: max|word| + 1)")
    p.add_argument("--tol", type=float, default=None)
    p.add_argument("--maxit", type=int, default=None)
    p.add_argument("--nconv", type=int, default=None)
    p.add_argument("--length", default=None,
                   choices=["intaxis", "minlength", "l2"])
    p.add_argument("--finite", action="store_true",
                   help="run exactly MAXIT iterations")
    p.add_argument("--set", dest="overrides", action="append", default=[],
                   type=_setting, metavar="KEY=VALUE",
                   help="override a default setting, e.g. entropy.tol=1e-8")
    p.add_argument("-v", "--verbose", action="count", default=0,
                   help="debug level (repeat for per-iteration trace)")
    p.add_argument("--json", action="store_true",
                   help="print the full result as JSON")
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = DEFAULT_SETTINGS
        if args.overrides:
            settings = DEFAULT_SETTINGS.replace(dict(args.overrides),
                                                name="cli")
    except KeyError as e:
        print(f"error: {e.args[0]}", file=sys.stderr)
        return 2

    debug_level = args.verbose or int(settings["debug.level"])
    logging.basicConfig(
        level=logging.DEBUG if debug_level else logging.WARNING,
        format="%(message)s")

    try:
        res = entropy(args.word, args.n, tol=args.tol, maxit=args.maxit,
                      nconv=args.nconv, length=args.length,
                      finite=args.finite, settings=settings,
                      debug_level=debug_level)
    except BraidEntropyError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps(res.to_dict(), indent=2))
    else:
        print(res.summary())
    return 0


if __name__ == "__main__":
    sys.exit(main())
