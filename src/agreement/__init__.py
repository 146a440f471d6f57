"""
Agreement package — Fleiss' kappa for multiple raters.

Public API surface:

    Engine:
        compute_fleiss_kappa, validate_rating_matrix, validate_alpha,
        overall_standard_error, classify_landis_koch, LandisKoch

    Result types:
        StatsResult, OverallStats, CategoryStats

    Report:
        render_report, print_report, category_table, export_kappa_results

    Runner:
        run_fleiss, load_rating_matrix, parse_matrix_literal

    Errors and warnings: see errors.py
"""

from .errors import (
    FleissKappaError,
    FleissKappaWarning,
    InconsistentRatersError,
    InvalidAlphaError,
    InvalidInputError,
    NoDataError,
    NoRatersError,
    NoValidCategoriesError,
    NumericalInstabilityWarning,
    ZeroCategoryVarianceWarning,
)
from .fleiss import (
    CategoryStats,
    LandisKoch,
    OverallStats,
    StatsResult,
    classify_landis_koch,
    compute_fleiss_kappa,
    overall_standard_error,
    validate_alpha,
    validate_rating_matrix,
)
from .report import category_table, export_kappa_results, print_report, render_report
from .runner import load_rating_matrix, parse_matrix_literal, run_fleiss

__all__ = [
    # engine
    "compute_fleiss_kappa",
    "validate_rating_matrix",
    "validate_alpha",
    "overall_standard_error",
    "classify_landis_koch",
    "LandisKoch",
    # results
    "StatsResult",
    "OverallStats",
    "CategoryStats",
    # report
    "render_report",
    "print_report",
    "category_table",
    "export_kappa_results",
    # runner
    "run_fleiss",
    "load_rating_matrix",
    "parse_matrix_literal",
    # errors
    "FleissKappaError",
    "InvalidInputError",
    "InconsistentRatersError",
    "NoRatersError",
    "NoDataError",
    "InvalidAlphaError",
    "NoValidCategoriesError",
    # warnings
    "FleissKappaWarning",
    "ZeroCategoryVarianceWarning",
    "NumericalInstabilityWarning",
]
