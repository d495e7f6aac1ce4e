"""Ridge-regularized linear least squares."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

DEFAULT_RIDGE = 0.0001


class PowerRatingComputationError(RuntimeError):
    """Raised when the regularized normal equations cannot be solved."""


def solve_least_squares(
    a: np.ndarray | Sequence[Sequence[float]],
    y: np.ndarray | Sequence[float],
    ridge: float = DEFAULT_RIDGE,
) -> np.ndarray:
    """Solve ``x = (AᵀA + ridge·I)⁻¹ Aᵀy``.

    Alliance-membership matrices are sparse and frequently rank deficient, so
    the ridge term keeps the normal matrix invertible and shrinks the estimates
    of low-sample teams slightly toward zero.

    An empty vector is returned when ``a`` has no rows or no columns.
    """
    if ridge < 0.0:
        raise ValueError("ridge must be >= 0")

    design = np.asarray(a, dtype=float)
    if design.size == 0:
        return np.zeros(0, dtype=float)
    if design.ndim != 2:
        raise ValueError(f"design matrix must be 2-dimensional, got shape {design.shape}")

    target = np.asarray(y, dtype=float).reshape(-1)
    if target.shape[0] != design.shape[0]:
        raise ValueError(
            f"target length {target.shape[0]} does not match design rows {design.shape[0]}"
        )

    normal = design.T @ design
    normal[np.diag_indices_from(normal)] += ridge
    try:
        inverse = np.linalg.inv(normal)
    except np.linalg.LinAlgError as exc:
        raise PowerRatingComputationError(
            f"regularized normal matrix of shape {normal.shape} is singular (ridge={ridge})"
        ) from exc

    return inverse @ (design.T @ target)


__all__ = ["DEFAULT_RIDGE", "PowerRatingComputationError", "solve_least_squares"]
