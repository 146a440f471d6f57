"""
Agreement-layer configuration: default significance level, Landis & Koch
bands, report formatting, the bundled example data set, and output paths.
"""

from pathlib import Path

# ---------------------------------------------------------------------------
# Project paths
# ---------------------------------------------------------------------------

PROJECT_ROOT = Path(__file__).resolve().parents[2]

RESULTS_DIR = PROJECT_ROOT / "results"       # exported kappa tables/reports

RESULTS_JSON_NAME: str = "fleiss_kappa.json"
CATEGORY_CSV_NAME: str = "fleiss_kappa_categories.csv"

# ---------------------------------------------------------------------------
# Statistical parameters
# ---------------------------------------------------------------------------

DEFAULT_ALPHA: float = 0.05

# ---------------------------------------------------------------------------
# Landis & Koch (1977) qualitative bands
# ---------------------------------------------------------------------------

# (inclusive upper bound, label) — checked in order after the k < 0 case.
LANDIS_KOCH_POOR: str = "Poor agreement"
LANDIS_KOCH_UNDEFINED: str = "Undefined agreement"

LANDIS_KOCH_BANDS: list[tuple[float, str]] = [
    (0.20, "Slight agreement"),
    (0.40, "Fair agreement"),
    (0.60, "Moderate agreement"),
    (0.80, "Substantial agreement"),
    (1.00, "Perfect agreement"),
]

# ---------------------------------------------------------------------------
# Report formatting
# ---------------------------------------------------------------------------

REPORT_WIDTH: int = 60
REPORT_DECIMALS: int = 4
MISSING_VALUE: str = "N/A"
MAX_REPORTED_POSITIONS: int = 5   # offending cells/rows named in error messages

# ---------------------------------------------------------------------------
# Example data set
# ---------------------------------------------------------------------------

# Fourteen psychiatrists (raters) diagnose ten patients (subjects), choosing
# among five possible diagnoses (categories).  Fleiss (1971).
EXAMPLE_MATRIX: list[list[int]] = [
    [0, 0, 0, 0, 14],
    [0, 2, 6, 4, 2],
    [0, 0, 3, 5, 6],
    [0, 3, 9, 2, 0],
    [2, 2, 8, 1, 1],
    [7, 7, 0, 0, 0],
    [3, 2, 6, 3, 0],
    [2, 5, 3, 2, 2],
    [6, 5, 2, 1, 0],
    [0, 2, 2, 3, 7],
]
