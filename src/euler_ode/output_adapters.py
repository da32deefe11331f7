# src/euler_ode/output_adapters.py

import logging
import os

import matplotlib
import pandas as pd

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from euler_ode.comparator import AlignmentResult  # noqa: E402


def _label(prefix, n):
    return f"{prefix}_n{n}"


def _aligned_column(aligned: AlignmentResult):
    """Matched slots keep their value, including nan/inf; unmatched slots are empty strings."""
    return [repr(float(v)) if m else '' for v, m in zip(aligned.values, aligned.matched)]


def write_run_csv(t_values, y_analytic_values, y_euler_values, n, filename):
    """Writes one run as (t, analytic, euler_n<n>)."""
    df = pd.DataFrame({
        't': t_values,
        'analytic': y_analytic_values,
        _label('euler', n): y_euler_values,
    })
    df.to_csv(filename, index=False, na_rep='nan')
    logging.info(f"Saved n={n} results to {filename}")
    return df


def write_wide_csv(t_fine, y_analytic_fine, coarse_aligned: AlignmentResult, y_euler_fine,
                   n_coarse, n_fine, filename):
    """
    Writes one row per fine-grid sample: (t, analytic, euler_n<coarse>, euler_n<fine>).
    The coarse column is blank wherever no coarse sample aligned.
    """
    df = pd.DataFrame({
        't': t_fine,
        'analytic': y_analytic_fine,
        _label('euler', n_coarse): _aligned_column(coarse_aligned),
        _label('euler', n_fine): y_euler_fine,
    })
    df.to_csv(filename, index=False, na_rep='nan')
    logging.info(f"Saved combined results ({coarse_aligned.n_matched} aligned n={n_coarse} rows) to {filename}")
    return df


def write_error_csv(t_fine, coarse_errors_aligned: AlignmentResult, fine_errors, n_coarse, n_fine, filename):
    """Writes (t, error_n<coarse>, error_n<fine>) on the fine grid, blanks where unaligned."""
    df = pd.DataFrame({
        't': t_fine,
        _label('error', n_coarse): _aligned_column(coarse_errors_aligned),
        _label('error', n_fine): fine_errors,
    })
    df.to_csv(filename, index=False, na_rep='nan')
    logging.info(f"Saved error table to {filename}")
    return df


def plot_solutions(t_analytic, y_analytic_values, t_coarse, y_coarse, t_fine, y_fine,
                   n_coarse, n_fine, filename):
    plt.figure(figsize=(8, 6))
    plt.plot(t_analytic, y_analytic_values, '-', color=(0.0, 0.0, 1.0), linewidth=2, label='Analytic')
    plt.plot(t_coarse, y_coarse, '-', color='crimson', label=f'Euler n={n_coarse}')
    plt.plot(t_fine, y_fine, '-', color='forestgreen', label=f'Euler n={n_fine}')
    plt.xlabel('t')
    plt.ylabel('y(t)')
    plt.title(f"Analytic vs Euler Solutions (n={n_coarse}, n={n_fine})")
    plt.legend()
    plt.grid(True)
    plt.savefig(filename)
    plt.close()
    logging.info(f"Saved solution plot to {filename}")


def plot_errors(t_coarse, coarse_errors, t_fine, fine_errors, n_coarse, n_fine, filename, y_limit=0.5):
    """Plots numeric - analytic for both runs on a fixed [-y_limit, y_limit] axis."""
    plt.figure(figsize=(8, 6))
    plt.plot(t_coarse, coarse_errors, '-', color='crimson', label=f'Error n={n_coarse}')
    plt.plot(t_fine, fine_errors, '-', color='forestgreen', label=f'Error n={n_fine}')
    plt.xlim(t_coarse[0], t_fine[-1])
    plt.ylim(-y_limit, y_limit)
    plt.xlabel('t')
    plt.ylabel('Euler - analytic')
    plt.title(f"Euler Method Errors (n={n_coarse}, n={n_fine})")
    plt.legend()
    plt.grid(True)
    plt.savefig(filename)
    plt.close()
    logging.info(f"Saved error plot to {filename}")


def output_path(output_dir, filename):
    os.makedirs(output_dir, exist_ok=True)
    return os.path.join(output_dir, filename)
