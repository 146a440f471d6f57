"""
Shared pytest fixtures for the Fleiss' kappa tests.

The reference matrix is Fleiss (1971): fourteen psychiatrists (raters)
diagnose ten patients (subjects) into five diagnoses (categories).  Expected
values below were computed independently and are quoted to four decimals.
"""

from __future__ import annotations

import pytest


# ---------------------------------------------------------------------------
# Reference scenario
# ---------------------------------------------------------------------------

PSYCHIATRIC_MATRIX = [
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

EXPECTED_KJ = [0.2013, 0.0797, 0.1716, 0.0304, 0.5077]
EXPECTED_PJ = [20 / 140, 28 / 140, 39 / 140, 21 / 140, 32 / 140]
EXPECTED_SEKJ = 0.0331
EXPECTED_KAPPA = 0.2099
EXPECTED_SE = 0.0170
EXPECTED_CI = (0.1767, 0.2432)
EXPECTED_Z = 12.3743


# ---------------------------------------------------------------------------
# Matrix fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def psychiatric_matrix():
    """10 subjects × 5 categories, 14 raters per subject."""
    return [list(row) for row in PSYCHIATRIC_MATRIX]


@pytest.fixture
def perfect_matrix():
    """Every subject rated unanimously; both categories in use (k = 1)."""
    return [[5, 0], [0, 5]] * 5


@pytest.fixture
def chance_matrix():
    """
    Within-subject agreement equals what the 50/50 marginals predict (k = 0).

    Disagreement mass per category: 0 + 0 + 1 + 1 = 2; c·b = 8·0.25 = 2.
    """
    return [[2, 0], [0, 2], [1, 1], [1, 1]]


@pytest.fixture
def zero_column_matrix(psychiatric_matrix):
    """Reference matrix plus a sixth category nobody chose (pj = 0)."""
    return [row + [0] for row in psychiatric_matrix]
