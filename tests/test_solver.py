"""Unit tests for the ridge-regularized least-squares solver."""

from __future__ import annotations

import numpy as np
import pytest

from domain.ratings.solver import PowerRatingComputationError, solve_least_squares


def test_one_by_one_system_shows_ridge_shrinkage() -> None:
    result = solve_least_squares([[1.0]], [10.0], 0.0001)
    assert result.shape == (1,)
    assert result[0] == pytest.approx(10.0 / 1.0001)


def test_empty_design_returns_empty_vector() -> None:
    assert solve_least_squares([], []).shape == (0,)
    assert solve_least_squares([[]], [5.0]).shape == (0,)


def test_well_conditioned_system_matches_exact_solution() -> None:
    a = np.array([[1.0, 0.0], [0.0, 1.0], [1.0, 1.0]])
    y = np.array([3.0, 4.0, 7.0])
    result = solve_least_squares(a, y, ridge=1e-9)
    assert result == pytest.approx([3.0, 4.0], abs=1e-6)


def test_rank_deficient_system_is_solvable_with_ridge() -> None:
    # Two teams that only ever play together are indistinguishable.
    a = [[1.0, 1.0], [1.0, 1.0]]
    result = solve_least_squares(a, [10.0, 10.0])
    assert result[0] == pytest.approx(result[1])
    assert result[0] + result[1] == pytest.approx(10.0, rel=1e-3)


def test_singular_matrix_without_ridge_raises_computation_error() -> None:
    with pytest.raises(PowerRatingComputationError, match="singular"):
        solve_least_squares([[1.0, 1.0], [1.0, 1.0]], [1.0, 2.0], ridge=0.0)


def test_negative_ridge_is_rejected() -> None:
    with pytest.raises(ValueError, match="ridge must be >= 0"):
        solve_least_squares([[1.0]], [1.0], ridge=-1.0)


def test_mismatched_target_length_is_rejected() -> None:
    with pytest.raises(ValueError, match="does not match design rows"):
        solve_least_squares([[1.0], [1.0]], [1.0])
