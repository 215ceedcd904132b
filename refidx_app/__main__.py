from __future__ import annotations

import argparse
import sys
from typing import Sequence

import numpy as np
import pandas as pd

from refidx_app.adapters.registry import list_substances
from refidx_app.domain.errors import RefractiveIndexError
from refidx_app.exporting.io import to_csv_bytes
from refidx_app.orchestration.engine import RefractiveIndexEngine
from refidx_app.utils.logging import get_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m refidx_app",
        description="Complex refractive index of ice/snow, water, dust and soot.",
    )
    parser.add_argument("wavelengths", nargs="*", type=float,
                        help="wavelength(s); omit for the native grid (ice/water only)")
    parser.add_argument("-s", "--substance", required=True,
                        help=f"one of: {', '.join(list_substances())}")
    parser.add_argument("-u", "--units", default="um",
                        help="wavelength units: um, nm, mm, cm, m, GHz (default: um)")
    parser.add_argument("--csv", action="store_true", help="write CSV instead of a text table")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """
    CLI entry.

    Prints wavelength, n and k for the requested substance. Errors in the
    substance, unit or wavelength arguments exit with status 2.
    """
    args = build_parser().parse_args(argv)
    get_logger()
    engine = RefractiveIndexEngine()
    try:
        N, wave = engine.compute(np.asarray(args.wavelengths, dtype=float), args.substance, args.units)
    except (RefractiveIndexError, ValueError) as e:
        sys.stderr.write(f"error: {e}\n")
        return 2

    col = f"wavelength_{args.units}"
    df = pd.DataFrame({col: np.ravel(wave), "n": np.ravel(N.real), "k": np.ravel(N.imag)})
    if args.csv:
        sys.stdout.write(to_csv_bytes(df).decode("utf-8"))
    else:
        sys.stdout.write(df.to_string(index=False, float_format=lambda v: f"{v:.6g}") + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
