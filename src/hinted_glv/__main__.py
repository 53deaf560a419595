"""Main entry point: python -m hinted_glv"""

from __future__ import annotations

import argparse
import csv
import logging
import time

import numpy as np

from hinted_glv import __version__
from hinted_glv.curves import native
from hinted_glv.curves.params import CurveID, get_curve_params
from hinted_glv.errors import HintedGLVError
from hinted_glv.frontend.api import solve
from hinted_glv.lattice.glv import decompose_zz2, get_glv_params
from hinted_glv.lattice.halfgcd import half_gcd_split
from hinted_glv.scalarmul.circuit import (
    ENDOMORPHISM_STRATEGIES,
    STRATEGIES,
    ScalarMulCircuit,
)
from hinted_glv.scalarmul.decompose import zz2_nbits


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hinted-glv",
        description="Hinted GLV / fake-GLV scalar multiplication in circuits",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command")

    # bench
    bench = sub.add_parser("bench", help="Constraint counts of every strategy")
    bench.add_argument(
        "--curve",
        choices=[c.value for c in CurveID],
        default=CurveID.BANDERSNATCH.value,
        help="Curve (default bandersnatch)",
    )
    bench.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    bench.add_argument("--csv", type=str, default=None, help="Export results to this CSV path")

    # decompose
    dec = sub.add_parser("decompose", help="Show the 2-term and 4-term scalar decompositions")
    dec.add_argument("scalar", type=str, help="Scalar (decimal or 0x-prefixed hex)")
    dec.add_argument(
        "--emulated", action="store_true", help="Also print the values reduced mod r"
    )

    return parser


def run_bench(args: argparse.Namespace) -> None:
    """Build every applicable strategy on a random valid witness."""
    curve_id = CurveID(args.curve)
    params = get_curve_params(curve_id)
    seed = args.seed if args.seed is not None else 42
    rng = np.random.default_rng(seed)

    s = native.random_scalar(params.order, rng)
    p = params.base
    r = native.scalar_mul(params, p, s)

    print(f"Curve:  {params.name}")
    print(f"Scalar: {s}")
    print()

    rows = []
    for name in STRATEGIES:
        if name in ENDOMORPHISM_STRATEGIES and not params.has_endomorphism:
            continue
        start = time.perf_counter()
        api = solve(ScalarMulCircuit(name, p, r, s, curve_id))
        elapsed = time.perf_counter() - start
        rows.append(
            {
                "strategy": name,
                "constraints": api.nb_constraints,
                "variables": api.nb_variables,
                "hints": api.nb_hints,
                "satisfied": api.is_satisfied(),
                "seconds": round(elapsed, 3),
            }
        )

    print("=" * 50)
    print(" SCALAR MULTIPLICATION BENCHMARK")
    print("=" * 50)
    for row in rows:
        print(
            f"  {row['strategy']:<18} {row['constraints']:>8} constraints"
            f"  satisfied={row['satisfied']}"
        )
    print("=" * 50)

    if args.csv:
        with open(args.csv, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=list(rows[0]))
            writer.writeheader()
            writer.writerows(rows)
        print(f"Results exported to {args.csv}")


def run_decompose(args: argparse.Namespace) -> None:
    """Print both decompositions of a scalar and check their relations."""
    glv = get_glv_params()
    order = glv.order
    s = int(args.scalar, 0) % order

    split = half_gcd_split(order, s)
    two_term_ok = (split.s1 + split.signed_s2() * s) % order == 0

    dec = decompose_zz2(s, glv.lambda_)
    lam = glv.lambda_
    four_term_ok = (dec.u1 + lam * dec.u2 + s * (dec.v1 + lam * dec.v2)) % order == 0
    bound = 1 << zz2_nbits(order)

    print("=" * 50)
    print(" SCALAR DECOMPOSITION")
    print("=" * 50)
    print(f"  s:                   {s}")
    print(f"  s1:                  {split.s1}")
    print(f"  s2:                  {split.signed_s2()}")
    print(f"  k:                   {split.quotient}")
    print(f"  s1 + s2*s = k*r:     {two_term_ok}")
    print(f"  u1, u2:              {dec.u1}, {dec.u2}")
    print(f"  v1, v2:              {dec.v1}, {dec.v2}")
    print(f"  relation mod r:      {four_term_ok}")
    print(f"  within bit bound:    {all(m < bound for m in dec.magnitudes())}")
    if args.emulated:
        print(f"  mod r:               {[c % order for c in dec.as_tuple()]}")
    print("=" * 50)


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        if args.command == "bench":
            run_bench(args)
        elif args.command == "decompose":
            run_decompose(args)
        else:
            parser.print_help()
    except HintedGLVError as exc:
        parser.exit(2, f"error: {exc}\n")


if __name__ == "__main__":
    main()
