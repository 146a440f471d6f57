"""
Fleiss' kappa for multiple raters and categorical ratings.

Given an N×K count matrix (subjects × categories) where every subject was
rated by the same m raters, computes:

- per-category kappa kj with its shared standard error, z and p-value;
- the overall kappa as the b-weighted mean of the valid kj;
- the standard error, normal-approximation confidence interval, z and
  two-sided p-value of the overall kappa;
- the Landis & Koch (1977) qualitative label.

A category whose proportion pj is exactly 0 or 1 has no variance: its kj is
NaN and it is left out of the overall aggregate.  Everything here is pure;
printing and file export live in report.py.
"""

from __future__ import annotations

import math
import numbers
import warnings
from dataclasses import asdict, dataclass, field

import numpy as np
from scipy import stats

from .config import (
    DEFAULT_ALPHA,
    LANDIS_KOCH_BANDS,
    LANDIS_KOCH_POOR,
    LANDIS_KOCH_UNDEFINED,
    MAX_REPORTED_POSITIONS,
)
from .errors import (
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


# ---------------------------------------------------------------------------
# Landis & Koch classification
# ---------------------------------------------------------------------------

class LandisKoch:
    """
    Landis & Koch (1977) agreement labels and classification logic.

    Bands are closed on the right: 0.20 is "Slight", 0.2001 is "Fair".
    """

    POOR = LANDIS_KOCH_POOR
    SLIGHT, FAIR, MODERATE, SUBSTANTIAL, PERFECT = (
        label for _, label in LANDIS_KOCH_BANDS
    )
    UNDEFINED = LANDIS_KOCH_UNDEFINED

    @staticmethod
    def classify(kappa: float) -> str:
        """Map a kappa value to its label; NaN maps to UNDEFINED."""
        if math.isnan(kappa):
            return LandisKoch.UNDEFINED
        if kappa < 0:
            return LandisKoch.POOR
        for upper, label in LANDIS_KOCH_BANDS:
            if kappa <= upper:
                return label
        return LandisKoch.PERFECT


def classify_landis_koch(kappa: float) -> str:
    """Qualitative agreement label for ``kappa`` (see LandisKoch)."""
    return LandisKoch.classify(float(kappa))


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

def _clean(value):
    """Convert NaN/inf to None and numpy scalars to builtins for JSON export."""
    if isinstance(value, tuple):
        return [_clean(v) for v in value]
    if isinstance(value, (float, np.floating)):
        return float(value) if math.isfinite(value) else None
    if isinstance(value, np.integer):
        return int(value)
    return value


@dataclass(frozen=True)
class CategoryStats:
    """Kappa statistics for a single category (column) j."""

    index: int
    pj: float
    kj: float
    z: float
    p: float
    valid: bool


@dataclass(frozen=True)
class OverallStats:
    """Aggregate kappa statistics across all valid categories."""

    kappa: float
    se: float
    ci: tuple[float, float]
    z: float
    p: float
    landis_koch_class: str


@dataclass(frozen=True)
class StatsResult:
    """
    Complete output of one Fleiss' kappa computation.

    ``warnings`` holds the non-fatal conditions met along the way; it does
    not take part in equality, so two runs on the same input compare equal.
    """

    n_subjects: int
    n_categories: int
    n_raters: int
    alpha: float
    sekj: float
    categories: tuple[CategoryStats, ...]
    overall: OverallStats
    warnings: tuple[FleissKappaWarning, ...] = field(default=(), compare=False)

    # -- per-category views --------------------------------------------------

    @property
    def pj(self) -> tuple[float, ...]:
        return tuple(cat.pj for cat in self.categories)

    @property
    def kj(self) -> tuple[float, ...]:
        return tuple(cat.kj for cat in self.categories)

    @property
    def zkj(self) -> tuple[float, ...]:
        return tuple(cat.z for cat in self.categories)

    @property
    def pkj(self) -> tuple[float, ...]:
        return tuple(cat.p for cat in self.categories)

    @property
    def valid_categories(self) -> tuple[int, ...]:
        return tuple(cat.index for cat in self.categories if cat.valid)

    # -- overall views -------------------------------------------------------

    @property
    def kappa(self) -> float:
        return self.overall.kappa

    @property
    def se(self) -> float:
        return self.overall.se

    @property
    def ci(self) -> tuple[float, float]:
        return self.overall.ci

    @property
    def z(self) -> float:
        return self.overall.z

    @property
    def p(self) -> float:
        return self.overall.p

    @property
    def landis_koch_class(self) -> str:
        return self.overall.landis_koch_class

    @property
    def reject_null(self) -> bool | None:
        """True if p < alpha; None when the test is not available."""
        if math.isnan(self.p):
            return None
        return bool(self.p < self.alpha)

    def to_dict(self) -> dict:
        """Flat, JSON-ready view of the result (NaN and inf → None)."""
        out = {
            "n_subjects": self.n_subjects,
            "n_categories": self.n_categories,
            "n_raters": self.n_raters,
            "alpha": self.alpha,
            "pj": self.pj,
            "kj": self.kj,
            "sekj": self.sekj,
            "zkj": self.zkj,
            "pkj": self.pkj,
            "valid_categories": list(self.valid_categories),
            **asdict(self.overall),
            "reject_null": self.reject_null,
            "warnings": [f"{type(w).__name__}: {w}" for w in self.warnings],
        }
        return {key: _clean(value) for key, value in out.items()}


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def _as_count_array(matrix) -> np.ndarray:
    """Coerce ``matrix`` to a float array of nonnegative integer counts."""
    try:
        arr = np.asarray(matrix)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(
            f"Rating matrix could not be read as a rectangular array: {exc}"
        ) from exc

    if arr.ndim != 2 or arr.size == 0:
        raise InvalidInputError(
            f"Rating matrix must be a non-empty 2-D array; got shape {arr.shape}."
        )
    # 'b' (bool), 'c' (complex), 'O'/'U' (objects, strings) are rejected.
    if arr.dtype.kind not in "iuf":
        raise InvalidInputError(
            f"Rating matrix entries must be real numbers; got dtype {arr.dtype}."
        )

    counts = arr.astype(float)
    finite = np.isfinite(counts)
    safe = np.where(finite, counts, 0.0)
    bad = ~finite | (safe < 0) | (safe != np.floor(safe))
    if bad.any():
        positions = [tuple(int(i) for i in pos) for pos in np.argwhere(bad)]
        shown = ", ".join(
            f"{pos}={arr[pos].item()!r}" for pos in positions[:MAX_REPORTED_POSITIONS]
        )
        more = len(positions) - MAX_REPORTED_POSITIONS
        suffix = f" (and {more} more)" if more > 0 else ""
        raise InvalidInputError(
            "Rating matrix entries must be finite nonnegative integers; "
            f"offending (row, column) entries: {shown}{suffix}."
        )

    counts.setflags(write=False)
    return counts


def validate_rating_matrix(matrix) -> tuple[np.ndarray, int]:
    """
    Validate a subjects × categories count matrix.

    Args:
        matrix: Any 2-D array-like of counts (nested lists, ndarray,
                DataFrame).  It is copied, never modified.

    Returns:
        Tuple of (read-only float copy of the counts, raters per subject).

    Raises:
        InvalidInputError: Entries are not finite nonnegative integers.
        InconsistentRatersError: Row sums differ.
        NoRatersError: Rows sum to zero.
        NoDataError: No ratings at all.
    """
    counts = _as_count_array(matrix)

    row_sums = counts.sum(axis=1)
    n_raters = row_sums[0]
    mismatched = np.flatnonzero(row_sums != n_raters)
    if mismatched.size:
        shown = mismatched[:MAX_REPORTED_POSITIONS]
        listing = ", ".join(f"row {int(i)} sums to {int(row_sums[i])}" for i in shown)
        more = mismatched.size - shown.size
        suffix = f" (and {more} more)" if more > 0 else ""
        raise InconsistentRatersError(
            "The number of raters per subject (row sums) must be constant: "
            f"row 0 sums to {int(n_raters)}, but {listing}{suffix}."
        )

    n_raters = int(n_raters)
    if n_raters <= 0:
        raise NoRatersError("The number of raters per subject must be positive.")

    if counts.shape[0] * n_raters <= 0:
        raise NoDataError("The rating matrix contains no positive counts.")

    return counts, n_raters


def validate_alpha(alpha) -> float:
    """Return ``alpha`` as a float, or raise InvalidAlphaError."""
    if isinstance(alpha, bool) or not isinstance(alpha, numbers.Real):
        raise InvalidAlphaError(f"alpha must be a real number; got {alpha!r}.")
    alpha = float(alpha)
    if not math.isfinite(alpha) or not 0 < alpha < 1:
        raise InvalidAlphaError(
            f"alpha must be finite and strictly between 0 and 1; got {alpha}."
        )
    return alpha


# ---------------------------------------------------------------------------
# Computation
# ---------------------------------------------------------------------------

def _two_sided_p(z):
    """Two-sided normal p-value 2·(1 − Φ(|z|)); NaN stays NaN."""
    return 2 * (1 - stats.norm.cdf(np.abs(z)))


def _issue(notice: FleissKappaWarning) -> FleissKappaWarning:
    # stacklevel 3 points at the caller of compute_fleiss_kappa
    warnings.warn(notice, stacklevel=3)
    return notice


def _standard_error(
    pj_valid: np.ndarray,
    b_valid: np.ndarray,
    c: float,
) -> tuple[float, NumericalInstabilityWarning | None]:
    d = float(np.sum(b_valid))
    num = 2 * (d**2 - float(np.sum(b_valid * (1 - 2 * pj_valid))))
    den = math.sqrt(c) * d if c > 0 else 0.0
    if den <= 0 or num < 0:
        return math.nan, NumericalInstabilityWarning(
            "Numerical issues in standard error computation "
            f"(numerator={num:.6g}, denominator={den:.6g}); setting SE to NaN."
        )
    return math.sqrt(num) / den, None


def overall_standard_error(
    pj_valid,
    b_valid,
    c: float,
) -> float:
    """
    Standard error of the overall kappa.

        se = sqrt(2·(d² − Σ b·(1 − 2·pj))) / (sqrt(c)·d),  d = Σ b

    Args:
        pj_valid: Category proportions of the valid categories.
        b_valid: pj·(1 − pj) for the same categories.
        c: a·(m − 1), total ratings times raters-minus-one.

    Returns:
        The standard error, or NaN (with a NumericalInstabilityWarning) when
        the denominator is not positive or the radicand is negative.
    """
    se, notice = _standard_error(np.asarray(pj_valid, dtype=float),
                                 np.asarray(b_valid, dtype=float), c)
    if notice is not None:
        warnings.warn(notice, stacklevel=2)
    return se


def compute_fleiss_kappa(matrix, alpha: float = DEFAULT_ALPHA) -> StatsResult:
    """
    Compute Fleiss' kappa and its inference statistics.

    Args:
        matrix: N×K count matrix; entry (i, j) is the number of raters who
                put subject i in category j.  Rows must share one sum m > 0.
        alpha: Significance level for the confidence interval (default 0.05).

    Returns:
        StatsResult with per-category and overall statistics.  Non-fatal
        conditions (ZeroCategoryVarianceWarning, NumericalInstabilityWarning)
        are issued via ``warnings`` and recorded in ``result.warnings``.

    Raises:
        FleissKappaError subclass for any structural problem with the input;
        no partial result is produced.
    """
    counts, n_raters = validate_rating_matrix(matrix)
    alpha = validate_alpha(alpha)
    notices: list[FleissKappaWarning] = []

    n_subjects, n_categories = counts.shape
    a = n_subjects * n_raters

    pj = counts.sum(axis=0) / a
    b = pj * (1 - pj)
    c = float(a * (n_raters - 1))

    valid = b > 0
    if not valid.any():
        raise NoValidCategoriesError(
            "All categories have pj = 0 or pj = 1; Fleiss' kappa cannot be computed."
        )
    if not valid.all():
        dropped = [int(j) for j in np.flatnonzero(~valid)]
        notices.append(_issue(ZeroCategoryVarianceWarning(
            f"Categories {dropped} have pj = 0 or pj = 1; their kj are set to "
            "NaN and ignored in the overall kappa."
        )))

    # Σ_i x_ij·(m − x_ij): within-subject disagreement mass per category
    disagreement = (counts * (n_raters - counts)).sum(axis=0)
    kj = np.full(n_categories, np.nan)
    # one rater per subject: c = 0, kj is 0/0 and sekj is infinite
    with np.errstate(divide="ignore", invalid="ignore"):
        kj[valid] = 1 - disagreement[valid] / (c * b[valid])

    sekj = math.sqrt(2 / c) if c > 0 else math.inf
    zkj = kj / sekj
    pkj = _two_sided_p(zkj)

    b_valid = b[valid]
    kappa = float(np.sum(b_valid * kj[valid]) / np.sum(b_valid))

    se, notice = _standard_error(pj[valid], b_valid, c)
    if notice is not None:
        notices.append(_issue(notice))

    zcrit = float(stats.norm.ppf(1 - alpha / 2))
    ci = (kappa - zcrit * se, kappa + zcrit * se)
    with np.errstate(divide="ignore", invalid="ignore"):
        z = float(np.float64(kappa) / np.float64(se))
    p = float(_two_sided_p(z))

    categories = tuple(
        CategoryStats(
            index=j,
            pj=float(pj[j]),
            kj=float(kj[j]),
            z=float(zkj[j]),
            p=float(pkj[j]),
            valid=bool(valid[j]),
        )
        for j in range(n_categories)
    )
    overall = OverallStats(
        kappa=kappa,
        se=se,
        ci=ci,
        z=z,
        p=p,
        landis_koch_class=classify_landis_koch(kappa),
    )
    return StatsResult(
        n_subjects=int(n_subjects),
        n_categories=int(n_categories),
        n_raters=n_raters,
        alpha=alpha,
        sekj=sekj,
        categories=categories,
        overall=overall,
        warnings=tuple(notices),
    )
