"""Least-squares power rating modules."""

from domain.ratings.power_rating import (
    EventRatings,
    PowerRatingMap,
    calculate_category_opr,
    calculate_ccwm,
    calculate_dpr,
    calculate_event_ratings,
    calculate_opr,
    derive_teleop_opr,
)
from domain.ratings.solver import DEFAULT_RIDGE, PowerRatingComputationError, solve_least_squares

__all__ = [
    "DEFAULT_RIDGE",
    "EventRatings",
    "PowerRatingComputationError",
    "PowerRatingMap",
    "calculate_category_opr",
    "calculate_ccwm",
    "calculate_dpr",
    "calculate_event_ratings",
    "calculate_opr",
    "derive_teleop_opr",
    "solve_least_squares",
]
