"""Utility functions for PhysiViz."""

from .io import load_problem, save_problem, save_simulation_history
from .validation import (
    validate_non_negative,
    validate_positive,
    validate_timestep,
    warn_degenerate,
)

__all__ = [
    "save_simulation_history",
    "load_problem",
    "save_problem",
    "validate_positive",
    "validate_non_negative",
    "validate_timestep",
    "warn_degenerate",
]
