# src/euler_ode/systems_library.py

import numpy as np
import logging
import jax
import jax.numpy as jnp

from euler_ode.euler_solver import euler_solve

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')


def rhs(t, y):
    """Right-hand side of the ODE: y' = cos(t) - y."""
    return np.cos(t) - y


def y_analytic(t):
    """Closed-form solution for y(0) = 1: y(t) = (e^-t + cos(t) + sin(t)) / 2."""
    return (np.exp(-t) + np.cos(t) + np.sin(t)) / 2.0


def _y_analytic_jax(t):
    return (jnp.exp(-t) + jnp.cos(t) + jnp.sin(t)) / 2.0


def analytic_residual(t_eval):
    """
    Checks the closed form against the ODE itself.

    Differentiates the analytic solution with jax.grad and returns
    y'(t) - (cos(t) - y(t)) at every point of t_eval. A correct closed form
    gives zeros up to float32 rounding.
    """
    t_eval = jnp.atleast_1d(jnp.asarray(t_eval, dtype=jnp.float32))
    dy_dt_fn = jax.grad(_y_analytic_jax)

    y_pred = jax.vmap(_y_analytic_jax)(t_eval)
    dy_dt_pred = jax.vmap(dy_dt_fn)(t_eval)
    return np.asarray(dy_dt_pred - (jnp.cos(t_eval) - y_pred))


class SystemModel:
    """
    Base class for all system models.
    Ensures that all models have a consistent interface.
    """
    def get_derivative(self, t, y):
        raise NotImplementedError("The get_derivative method must be implemented by the subclass.")

    def solve_analytical(self, t_eval):
        raise NotImplementedError("The solve_analytical method must be implemented by the subclass.")


class ForcedDecaySystem(SystemModel):
    """
    A first-order relaxation driven by a cosine input: y' = cos(t) - y.
    The closed form y_analytic only holds for the initial condition t0=0, y0=1.
    """
    def __init__(self, t0=0.0, y0=1.0):
        self.t0 = t0
        self.y0 = y0
        logging.info(f"ForcedDecaySystem initialized with t0={self.t0}, y0={self.y0}")

    def get_derivative(self, t, y):
        return rhs(t, y)

    def solve_analytical(self, t_eval):
        """Calculates the exact solution at the given time points."""
        return y_analytic(np.asarray(t_eval, dtype=float))

    def solve_euler(self, t_end, n):
        """Solves the system with n forward Euler steps from t0 to t_end."""
        return euler_solve(self.get_derivative, self.t0, self.y0, t_end, n)
