"""
Fleiss' kappa runner — loads a count matrix, computes, reports, exports.

Usage (from project root):
    python -m src.agreement.runner --example
    python -m src.agreement.runner --matrix-file ratings.csv --alpha 0.01
    python -m src.agreement.runner --matrix "0 0 14; 0 2 12" --output-dir results

Or programmatically:
    from src.agreement.runner import run_fleiss
    result = run_fleiss(matrix, alpha=0.05, display=False)
"""

from __future__ import annotations

import argparse
import re
import sys
import warnings
from pathlib import Path

import numpy as np
import pandas as pd

from .config import DEFAULT_ALPHA, EXAMPLE_MATRIX
from .errors import FleissKappaError, FleissKappaWarning, InvalidInputError
from .fleiss import StatsResult, compute_fleiss_kappa
from .report import export_kappa_results, print_report


# ---------------------------------------------------------------------------
# Matrix loaders
# ---------------------------------------------------------------------------

def load_rating_matrix(path: Path) -> np.ndarray:
    """
    Read a headerless subjects × categories CSV (comma or whitespace separated).

    Lines starting with '#' are ignored.

    Raises:
        FileNotFoundError: ``path`` does not exist.
        InvalidInputError: The file holds no rows.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Rating matrix file not found: {path}")
    try:
        df = pd.read_csv(path, header=None, sep=r"[,\s]+", engine="python", comment="#")
    except pd.errors.EmptyDataError as exc:
        raise InvalidInputError(f"Rating matrix file is empty: {path}") from exc
    except pd.errors.ParserError as exc:
        raise InvalidInputError(f"Rating matrix file is not rectangular: {exc}") from exc
    # leading/trailing separators produce all-empty columns
    df = df.dropna(axis=1, how="all")
    print(f"Loaded rating matrix: {df.shape[0]} subjects x {df.shape[1]} categories "
          f"from {path.name}")
    return df.to_numpy()


def parse_matrix_literal(text: str) -> np.ndarray:
    """
    Parse an inline matrix such as ``"0 0 14; 0 2 12"`` or ``"[[0,0,14],[0,2,12]]"``.

    Rows are separated by ';' or newlines (or '],['), entries by commas or
    whitespace.
    """
    body = text.strip().replace("],", ";").replace("[", "").replace("]", "")
    rows = [row for row in re.split(r"[;\n]", body) if row.strip()]
    if not rows:
        raise InvalidInputError("Matrix literal contains no rows.")

    parsed: list[list[float]] = []
    for i, row in enumerate(rows):
        try:
            parsed.append([float(tok) for tok in re.split(r"[,\s]+", row.strip())])
        except ValueError as exc:
            raise InvalidInputError(f"Row {i} of matrix literal is not numeric: {row!r}") from exc

    widths = {len(row) for row in parsed}
    if len(widths) != 1:
        raise InvalidInputError(
            f"Matrix literal rows have differing lengths: {[len(r) for r in parsed]}"
        )
    return np.array(parsed)


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------

def run_fleiss(
    matrix,
    alpha: float = DEFAULT_ALPHA,
    display: bool = True,
    output_dir: Path | None = None,
) -> StatsResult:
    """
    Compute Fleiss' kappa, optionally print the report and export files.

    Args:
        matrix: Subjects × categories count matrix.
        alpha: Significance level for the confidence interval.
        display: Print the text report to stdout.
        output_dir: If given, write JSON/CSV results there.

    Returns:
        The StatsResult from compute_fleiss_kappa.
    """
    result = compute_fleiss_kappa(matrix, alpha)
    if display:
        print_report(result)
    if output_dir is not None:
        export_kappa_results(result, output_dir=Path(output_dir))
    return result


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compute Fleiss' kappa for multiple raters from a "
                    "subjects x categories count matrix",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--matrix-file",
        type=Path,
        help="Headerless CSV of rater counts (one row per subject)",
    )
    source.add_argument(
        "--matrix",
        help='Inline matrix, rows separated by ";" (e.g. "0 0 14; 0 2 12")',
    )
    source.add_argument(
        "--example",
        action="store_true",
        help="Use the bundled 10-patient, 5-diagnosis, 14-psychiatrist data set",
    )
    parser.add_argument(
        "--alpha",
        type=float,
        default=DEFAULT_ALPHA,
        help=f"Significance level for the confidence interval (default {DEFAULT_ALPHA})",
    )
    parser.add_argument(
        "--quiet",
        action="store_false",
        dest="display",
        help="Do not print the report",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for JSON/CSV results (default: no export)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI; returns the process exit code."""
    args = _build_parser().parse_args(argv)

    try:
        if args.example:
            matrix = EXAMPLE_MATRIX
        elif args.matrix is not None:
            matrix = parse_matrix_literal(args.matrix)
        else:
            matrix = load_rating_matrix(args.matrix_file)

        # the report lists non-fatal warnings itself
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", FleissKappaWarning)
            run_fleiss(
                matrix,
                alpha=args.alpha,
                display=args.display,
                output_dir=args.output_dir,
            )
    except (FleissKappaError, FileNotFoundError) as e:
        print(f"ERROR: {type(e).__name__}: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
