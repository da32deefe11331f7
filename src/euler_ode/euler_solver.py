# src/euler_ode/euler_solver.py

import logging
import numbers
from typing import Callable, Tuple

import numpy as np

Derivative = Callable[[float, float], float]
Solution = Callable[[np.ndarray], np.ndarray]


class InvalidArgument(ValueError):
    """Raised when a run configuration cannot define a uniform grid."""


def _check_steps(n) -> int:
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise InvalidArgument(f"Number of steps must be an integer, got {n!r}.")
    if n < 1:
        raise InvalidArgument(f"Number of steps must be at least 1, got {n}.")
    return int(n)


def step_size(t0: float, t_end: float, n: int) -> float:
    """
    Computes the uniform step h = (t_end - t0) / n.

    Raises:
        InvalidArgument: if n is not a positive integer or the interval is empty
            or reversed.
    """
    n = _check_steps(n)
    if not t_end > t0:
        raise InvalidArgument(f"t_end must be greater than t0, got t0={t0}, t_end={t_end}.")
    return (t_end - t0) / n


def make_grid(t0: float, t_end: float, n: int) -> np.ndarray:
    """Returns the n+1 time samples t0 + i*h, i = 0..n."""
    h = step_size(t0, t_end, n)
    grid = t0 + h * np.arange(n + 1, dtype=float)
    grid.setflags(write=False)
    return grid


def euler_solve(derivative: Derivative, t0: float, y0: float, t_end: float, n: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Solves y' = derivative(t, y) with n explicit Euler steps.

    Times are advanced by repeated addition of h, so the last sample may differ
    from t_end by rounding. Overflow and NaN are carried through the recurrence
    unchanged.

    Returns:
        (t_values, y_values), two read-only arrays of length n+1.
    """
    h = step_size(t0, t_end, n)
    t_values = np.empty(n + 1, dtype=float)
    y_values = np.empty(n + 1, dtype=float)
    t_values[0] = t0
    y_values[0] = y0

    with np.errstate(over='ignore', invalid='ignore'):
        for i in range(n):
            current_t = t_values[i]
            current_y = y_values[i]
            y_values[i + 1] = current_y + h * derivative(current_t, current_y)
            t_values[i + 1] = current_t + h

    logging.info(f"Euler solve finished: n={n}, h={h}, y[-1]={y_values[-1]}")
    t_values.setflags(write=False)
    y_values.setflags(write=False)
    return t_values, y_values


def analytic_solve(solution: Solution, t0: float, t_end: float, n: int) -> Tuple[np.ndarray, np.ndarray]:
    """Samples the closed-form solution on the same grid an n-step run uses."""
    t_values = make_grid(t0, t_end, n)
    y_values = np.asarray(solution(t_values), dtype=float)
    y_values.setflags(write=False)
    return t_values, y_values


def error_series(y_numeric, y_reference) -> np.ndarray:
    """Pointwise numeric - reference for two index-aligned sequences."""
    y_numeric = np.asarray(y_numeric, dtype=float)
    y_reference = np.asarray(y_reference, dtype=float)
    if y_numeric.shape != y_reference.shape:
        raise ValueError(f"Cannot compare sequences of shape {y_numeric.shape} and {y_reference.shape}.")
    with np.errstate(invalid='ignore'):
        return y_numeric - y_reference
