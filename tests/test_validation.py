"""
Unit tests for input validation in src/agreement/fleiss.py.

Each structural problem must raise its own FleissKappaError subclass before
any statistic is computed:

- InvalidInputError: negative / fractional / NaN / inf / non-numeric entries,
  empty, ragged or non-2-D input.
- InconsistentRatersError: unequal row sums (message names the rows).
- NoRatersError: zero raters per subject (one rater is accepted).
- InvalidAlphaError: alpha outside (0, 1), non-finite, or not a real number.
- NoValidCategoriesError: every category has pj = 0 or pj = 1.
"""

from __future__ import annotations

import math

import numpy as np
import pytest

from src.agreement.errors import (
    FleissKappaError,
    InconsistentRatersError,
    InvalidAlphaError,
    InvalidInputError,
    NoRatersError,
    NoValidCategoriesError,
)
from src.agreement.fleiss import (
    compute_fleiss_kappa,
    validate_alpha,
    validate_rating_matrix,
)


# ---------------------------------------------------------------------------
# Class: matrix entries
# ---------------------------------------------------------------------------

class TestInvalidInput:

    @pytest.mark.parametrize("matrix", [
        [[2, -1, 3], [1, 1, 2]],
        [[1.5, 2.5], [2, 2]],
        [[math.nan, 4], [2, 2]],
        [[math.inf, 4], [2, 2]],
    ], ids=["negative", "fractional", "nan", "inf"])
    def test_bad_entries(self, matrix):
        with pytest.raises(InvalidInputError):
            compute_fleiss_kappa(matrix)

    def test_message_names_offending_cell(self):
        with pytest.raises(InvalidInputError, match=r"\(0, 1\)=-1"):
            compute_fleiss_kappa([[2, -1, 3], [1, 1, 2]])

    @pytest.mark.parametrize("matrix", [
        [],
        [[]],
        [1, 2, 3],
        [[[1, 1]], [[1, 1]]],
    ], ids=["empty", "empty-row", "1d", "3d"])
    def test_bad_shape(self, matrix):
        with pytest.raises(InvalidInputError):
            compute_fleiss_kappa(matrix)

    def test_ragged_rows(self):
        with pytest.raises(InvalidInputError):
            compute_fleiss_kappa([[1, 2], [3]])

    @pytest.mark.parametrize("matrix", [
        [["a", "b"], ["c", "d"]],
        [[True, False], [False, True]],
        np.array([[1 + 0j, 1], [1, 1]]),
    ], ids=["strings", "bools", "complex"])
    def test_non_real_entries(self, matrix):
        with pytest.raises(InvalidInputError):
            compute_fleiss_kappa(matrix)

    def test_errors_share_base_class(self):
        with pytest.raises(FleissKappaError):
            compute_fleiss_kappa([[1, -1]])
        with pytest.raises(ValueError):
            compute_fleiss_kappa([[1, -1]])

    def test_integer_valued_floats_accepted(self):
        counts, n_raters = validate_rating_matrix([[2.0, 1.0], [0.0, 3.0]])
        assert n_raters == 3
        assert counts.dtype == float
        assert not counts.flags.writeable


# ---------------------------------------------------------------------------
# Class: raters per subject
# ---------------------------------------------------------------------------

class TestRaters:

    def test_inconsistent_row_sums(self, psychiatric_matrix):
        # last row now sums to 13 instead of 14
        psychiatric_matrix[-1] = [0, 2, 2, 3, 6]
        with pytest.raises(InconsistentRatersError) as exc_info:
            compute_fleiss_kappa(psychiatric_matrix)
        message = str(exc_info.value)
        assert "row 0 sums to 14" in message
        assert "row 9 sums to 13" in message

    def test_inconsistent_message_truncated(self):
        matrix = [[3, 0]] + [[1, 0]] * 8
        with pytest.raises(InconsistentRatersError, match="and 3 more"):
            compute_fleiss_kappa(matrix)

    def test_no_raters(self):
        with pytest.raises(NoRatersError):
            compute_fleiss_kappa([[0, 0], [0, 0]])

    def test_single_rater_passes_validation(self):
        counts, n_raters = validate_rating_matrix([[1, 0], [0, 1]])
        assert n_raters == 1
        assert counts.shape == (2, 2)


# ---------------------------------------------------------------------------
# Class: alpha
# ---------------------------------------------------------------------------

class TestAlpha:

    @pytest.mark.parametrize("alpha", [
        0, 1, -0.05, 1.5, math.nan, math.inf, True, "0.05", None,
    ])
    def test_rejected(self, alpha, psychiatric_matrix):
        with pytest.raises(InvalidAlphaError):
            compute_fleiss_kappa(psychiatric_matrix, alpha=alpha)

    @pytest.mark.parametrize("alpha", [0.001, 0.05, 0.5, 0.999, np.float32(0.1)])
    def test_accepted(self, alpha):
        assert validate_alpha(alpha) == pytest.approx(float(alpha))

    def test_alpha_echoed(self, psychiatric_matrix):
        assert compute_fleiss_kappa(psychiatric_matrix, alpha=0.1).alpha == 0.1

    def test_matrix_checked_before_alpha(self):
        with pytest.raises(InconsistentRatersError):
            compute_fleiss_kappa([[2, 0], [0, 1]], alpha=2.0)
        with pytest.raises(NoRatersError):
            compute_fleiss_kappa([[0, 0], [0, 0]], alpha=math.nan)


# ---------------------------------------------------------------------------
# Class: categories
# ---------------------------------------------------------------------------

class TestNoValidCategories:

    def test_single_category_used(self):
        # pj = [1, 0, 0]
        with pytest.raises(NoValidCategoriesError):
            compute_fleiss_kappa([[3, 0, 0], [3, 0, 0]])

    def test_single_column_matrix(self):
        with pytest.raises(NoValidCategoriesError):
            compute_fleiss_kappa([[4], [4], [4]])
