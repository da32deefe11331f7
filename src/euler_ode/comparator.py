# src/euler_ode/comparator.py

import logging
from typing import Callable, NamedTuple

import numpy as np

from euler_ode.euler_solver import error_series
from euler_ode.systems_library import y_analytic

# Two samples closer than this in time are treated as the same instant.
# It decides how many coarse samples show up in the aligned tables.
ALIGNMENT_TOLERANCE = 1e-8


class AlignmentResult(NamedTuple):
    """Coarse values laid out on the fine grid. `matched` is authoritative; unmatched slots hold NaN."""
    values: np.ndarray
    matched: np.ndarray

    @property
    def n_matched(self) -> int:
        return int(np.count_nonzero(self.matched))

    def as_optional(self):
        """The result as a list of floats, with None where no coarse sample aligned."""
        return [float(v) if m else None for v, m in zip(self.values, self.matched)]


def align_to_grid(t_fine, t_coarse, coarse_values, tolerance: float = ALIGNMENT_TOLERANCE) -> AlignmentResult:
    """
    Places coarse samples onto the fine grid by a single forward merge.

    For each fine time in order, the coarse sample under the cursor is taken if
    its time is within `tolerance` (inclusive), and only then does the cursor advance. The
    cursor never moves back and a coarse sample is used at most once. When the
    coarse step is not a multiple of the fine step, unmatched samples are simply
    left out; no interpolation is done.
    """
    t_fine = np.asarray(t_fine, dtype=float)
    t_coarse = np.asarray(t_coarse, dtype=float)
    coarse_values = np.asarray(coarse_values, dtype=float)
    if t_coarse.shape != coarse_values.shape:
        raise ValueError(f"Coarse grid has {t_coarse.size} samples but {coarse_values.size} values were given.")

    values = np.full(t_fine.shape, np.nan)
    matched = np.zeros(t_fine.shape, dtype=bool)

    cursor = 0
    for i, t in enumerate(t_fine):
        if cursor < len(t_coarse) and abs(t_coarse[cursor] - t) <= tolerance:
            values[i] = coarse_values[cursor]
            matched[i] = True
            cursor += 1

    logging.info(f"Aligned {cursor} of {len(t_coarse)} coarse samples onto {len(t_fine)} fine samples (tolerance={tolerance})")
    return AlignmentResult(values=values, matched=matched)


def coarse_error_series(t_coarse, y_coarse, solution: Callable = y_analytic) -> np.ndarray:
    """Coarse numeric - analytic, with the analytic value taken at the coarse sample's own time."""
    t_coarse = np.asarray(t_coarse, dtype=float)
    return error_series(y_coarse, solution(t_coarse))


def align_errors(t_fine, t_coarse, y_coarse, solution: Callable = y_analytic,
                 tolerance: float = ALIGNMENT_TOLERANCE) -> AlignmentResult:
    """Aligns the coarse error series (not the coarse values) onto the fine grid."""
    errors = coarse_error_series(t_coarse, y_coarse, solution)
    return align_to_grid(t_fine, t_coarse, errors, tolerance=tolerance)
