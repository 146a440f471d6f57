"""
Text report, category table, and file export for Fleiss' kappa results.

The layout of render_report follows the classic console report of the
routine: category-wise kj / sekj / z / p, then the overall kappa block with
its confidence interval, Landis & Koch label, and null-hypothesis verdict.
NaN values (invalid categories, unstable standard errors) print as "N/A".
"""

from __future__ import annotations

import json
import math
from pathlib import Path

import numpy as np
import pandas as pd

from .config import (
    CATEGORY_CSV_NAME,
    MISSING_VALUE,
    REPORT_DECIMALS,
    REPORT_WIDTH,
    RESULTS_DIR,
    RESULTS_JSON_NAME,
)
from .fleiss import StatsResult


def _fmt(value: float) -> str:
    """Fixed-precision number, or MISSING_VALUE for NaN."""
    if value is None or math.isnan(value):
        return MISSING_VALUE
    return f"{value:.{REPORT_DECIMALS}f}"


def _row(values) -> str:
    return "  " + "  ".join(_fmt(v) for v in values)


def null_hypothesis_verdict(result: StatsResult) -> str:
    """One-line interpretation of the overall z-test at result.alpha."""
    if result.reject_null is None:
        return "Null hypothesis test not available: kappa cannot be computed reliably."
    if result.reject_null:
        return "Reject null hypothesis: observed agreement is not accidental"
    return "Accept null hypothesis: observed agreement is accidental"


# ---------------------------------------------------------------------------
# Tabular view
# ---------------------------------------------------------------------------

def category_table(result: StatsResult) -> pd.DataFrame:
    """
    One row per category with its proportion, kappa, z and p-value.

    Invalid categories keep NaN in kj / z / p; callers decide whether to
    display or drop them.
    """
    records: list[dict] = []
    for cat in result.categories:
        records.append({
            "category": cat.index + 1,
            "pj": cat.pj,
            "kj": cat.kj,
            "z": cat.z,
            "p": cat.p,
            "valid": cat.valid,
        })
    return pd.DataFrame(records)


# ---------------------------------------------------------------------------
# Text report
# ---------------------------------------------------------------------------

def render_report(result: StatsResult) -> str:
    """Build the human-readable report for ``result``."""
    rule = "-" * REPORT_WIDTH
    lo, hi = result.ci

    lines = [
        "FLEISS' KAPPA FOR MULTIPLE RATERS",
        rule,
        f"Subjects: {result.n_subjects}   Categories: {result.n_categories}   "
        f"Raters per subject: {result.n_raters}",
        "",
        "Category-wise kappa (kj):",
        _row(result.kj),
        "",
        f"Standard error of kj (sekj): {_fmt(result.sekj)}",
        "",
        "z for kj:",
        _row(result.zkj),
        "",
        "p-values for kj:",
        _row(result.pkj),
        "",
        rule,
        f"Fleiss' (overall) kappa = {_fmt(result.kappa)}",
        f"kappa error = {_fmt(result.se)}",
        f"kappa C.I. (alpha = {_fmt(result.alpha)}) = {_fmt(lo)} \t {_fmt(hi)}",
        result.landis_koch_class,
        f"z = {_fmt(result.z)} \t p = {_fmt(result.p)}",
        null_hypothesis_verdict(result),
    ]

    if result.warnings:
        lines.append(rule)
        lines.extend(
            f"WARNING: {type(w).__name__}: {w}" for w in result.warnings
        )

    return "\n".join(lines)


def print_report(result: StatsResult) -> None:
    """Print render_report(result) to stdout."""
    print(render_report(result))


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------

def _json_default(obj):
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return None if np.isnan(obj) else float(obj)
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    raise TypeError(f"Object of type {type(obj)} is not JSON serializable")


def export_kappa_results(
    result: StatsResult,
    output_dir: Path = RESULTS_DIR,
) -> dict[str, Path]:
    """
    Write the result as JSON plus a per-category CSV.

    Args:
        result: Output of compute_fleiss_kappa.
        output_dir: Directory for output files (created if missing).

    Returns:
        Dict with keys 'json' and 'categories_csv' mapping to written paths.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    json_path = output_dir / RESULTS_JSON_NAME
    with json_path.open("w", encoding="utf-8") as fh:
        json.dump(result.to_dict(), fh, indent=2, default=_json_default)

    csv_path = output_dir / CATEGORY_CSV_NAME
    category_table(result).to_csv(csv_path, index=False)

    print(f"Exported Fleiss' kappa results to {json_path} and {csv_path.name}")
    return {"json": json_path, "categories_csv": csv_path}
