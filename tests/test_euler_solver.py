# tests/test_euler_solver.py

import numpy as np
import pytest
from euler_ode.euler_solver import InvalidArgument, step_size, make_grid, euler_solve, analytic_solve, error_series
from euler_ode.systems_library import rhs, y_analytic

T0, Y0, T_END = 0.0, 1.0, 5.0

@pytest.mark.parametrize("n", [1, 7, 20, 1000])
def test_grid_shape_and_endpoints(n):
    t_values, _ = euler_solve(rhs, T0, Y0, T_END, n)
    assert len(t_values) == n + 1
    assert t_values[0] == T0
    assert t_values[-1] == pytest.approx(T_END, abs=1e-9)
    assert np.all(np.diff(t_values) > 0)

@pytest.mark.parametrize("n", [1, 20, 1000])
def test_make_grid(n):
    grid = make_grid(T0, T_END, n)
    assert len(grid) == n + 1
    assert grid[0] == T0
    assert grid[-1] == pytest.approx(T_END)
    assert np.all(np.diff(grid) > 0)

def test_make_grid_nonzero_start():
    grid = make_grid(1.0, 2.0, 4)
    assert np.allclose(grid, [1.0, 1.25, 1.5, 1.75, 2.0])

def test_first_sample_is_initial_value():
    for y0 in [1.0, -3.5, 0.1, 1e-300]:
        _, y_values = euler_solve(rhs, T0, y0, T_END, 20)
        assert y_values[0] == y0

def test_coarse_scenario_first_steps():
    """n=20 on [0, 5] gives h=0.25; y1 = 1 + 0.25 * (cos(0) - 1) = 1."""
    assert step_size(T0, T_END, 20) == 0.25
    t_values, y_values = euler_solve(rhs, T0, Y0, T_END, 20)
    assert list(t_values[:2]) == [0.0, 0.25]
    assert list(y_values[:2]) == [1.0, 1.0]
    # y2 = 1 + 0.25 * (cos(0.25) - 1)
    assert y_values[2] == pytest.approx(1.0 + 0.25 * (np.cos(0.25) - 1.0))

def test_repeated_solves_are_identical():
    t_a, y_a = euler_solve(rhs, T0, Y0, T_END, 1000)
    t_b, y_b = euler_solve(rhs, T0, Y0, T_END, 1000)
    assert t_a.tobytes() == t_b.tobytes()
    assert y_a.tobytes() == y_b.tobytes()

def test_error_decreases_with_resolution():
    """Forward Euler is first order, so the max error shrinks as n grows."""
    max_errors = []
    for n in [20, 200, 1000]:
        t_values, y_values = euler_solve(rhs, T0, Y0, T_END, n)
        max_errors.append(np.max(np.abs(error_series(y_values, y_analytic(t_values)))))
    assert max_errors[0] > max_errors[1] > max_errors[2]
    # Roughly proportional to h: 10x more steps, about 10x less error
    assert max_errors[0] / max_errors[1] > 5

def test_custom_derivative_is_used():
    """y' = 1 integrates exactly to a straight line."""
    t_values, y_values = euler_solve(lambda t, y: 1.0, 0.0, 2.0, 1.0, 4)
    assert np.allclose(y_values, 2.0 + t_values)

def test_outputs_are_read_only():
    t_values, y_values = euler_solve(rhs, T0, Y0, T_END, 20)
    with pytest.raises(ValueError):
        y_values[0] = 5.0
    with pytest.raises(ValueError):
        t_values[0] = 5.0

@pytest.mark.parametrize("n", [0, -1, 2.5, True, "20"])
def test_invalid_step_count(n):
    with pytest.raises(InvalidArgument):
        make_grid(T0, T_END, n)
    with pytest.raises(InvalidArgument):
        euler_solve(rhs, T0, Y0, T_END, n)

def test_zero_steps_is_a_value_error():
    with pytest.raises(ValueError):
        step_size(T0, T_END, 0)

def test_numpy_integer_step_count():
    grid = make_grid(T0, T_END, np.int64(4))
    assert len(grid) == 5

@pytest.mark.parametrize("t_end", [0.0, -1.0])
def test_empty_or_reversed_interval(t_end):
    with pytest.raises(InvalidArgument):
        euler_solve(rhs, T0, Y0, t_end, 10)

def test_invalid_run_does_not_affect_other_runs():
    t_before, y_before = euler_solve(rhs, T0, Y0, T_END, 20)
    with pytest.raises(InvalidArgument):
        euler_solve(rhs, T0, Y0, T_END, 0)
    t_after, y_after = euler_solve(rhs, T0, Y0, T_END, 20)
    assert np.array_equal(y_before, y_after)
    assert np.array_equal(t_before, t_after)

def test_divergence_propagates_without_raising():
    """With h=20 the recurrence multiplies y by about -19 each step and overflows."""
    _, y_values = euler_solve(rhs, 0.0, 1e300, 1000.0, 50)
    assert not np.all(np.isfinite(y_values))
    assert np.isnan(y_values[-1])

def test_analytic_solve_uses_same_grid():
    t_exact, y_exact = analytic_solve(y_analytic, T0, T_END, 20)
    t_euler, _ = euler_solve(rhs, T0, Y0, T_END, 20)
    assert np.allclose(t_exact, t_euler)
    assert y_exact[0] == pytest.approx(1.0)
    assert np.allclose(y_exact, y_analytic(t_exact))

def test_error_series():
    assert np.allclose(error_series([1.0, 2.0, 3.0], [0.5, 2.0, 4.0]), [0.5, 0.0, -1.0])

def test_error_series_shape_mismatch():
    with pytest.raises(ValueError):
        error_series([1.0, 2.0], [1.0, 2.0, 3.0])
