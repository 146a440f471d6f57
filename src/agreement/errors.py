"""
Exception hierarchy and warning categories for the Fleiss' kappa engine.

Structural problems with the input raise a ``FleissKappaError`` subclass
before any statistic is computed.  Conditions that only spoil part of the
output are ``FleissKappaWarning`` subclasses: they are issued through the
``warnings`` module and attached to the returned result.

    try:
        result = compute_fleiss_kappa(matrix)
    except FleissKappaError as e:
        print(f"ERROR: {type(e).__name__}: {e}")
"""

from __future__ import annotations


class FleissKappaError(ValueError):
    """Base exception for all invalid-input conditions."""


class InvalidInputError(FleissKappaError):
    """
    Raised when the rating matrix is not a usable count matrix.

    This includes:
    - Negative, non-integer, NaN or infinite entries
    - Non-numeric, boolean or complex values
    - Empty, ragged or non-2-D input
    """


class InconsistentRatersError(FleissKappaError):
    """Raised when subjects were rated by different numbers of raters."""


class NoRatersError(FleissKappaError):
    """Raised when the common number of raters per subject is zero."""


class NoDataError(FleissKappaError):
    """Raised when the matrix holds no ratings at all."""


class InvalidAlphaError(FleissKappaError):
    """Raised when alpha is not a finite real strictly between 0 and 1."""


class NoValidCategoriesError(FleissKappaError):
    """Raised when every category has pj equal to 0 or 1."""


# ---------------------------------------------------------------------------
# Non-fatal conditions
# ---------------------------------------------------------------------------

class FleissKappaWarning(UserWarning):
    """Base category for conditions that degrade, but do not stop, a run."""


class ZeroCategoryVarianceWarning(FleissKappaWarning):
    """Some (not all) categories have pj equal to 0 or 1; their kj are NaN."""


class NumericalInstabilityWarning(FleissKappaWarning):
    """The standard error of kappa could not be computed; se, ci, z, p are NaN."""
