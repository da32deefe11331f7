# src/euler_ode/main.py

import argparse
import logging
import os
from typing import NamedTuple, Optional, Sequence

import numpy as np

# --- Import our modular components ---
from euler_ode.systems_library import ForcedDecaySystem, y_analytic, analytic_residual
from euler_ode.euler_solver import error_series, InvalidArgument
from euler_ode.comparator import ALIGNMENT_TOLERANCE, align_to_grid, align_errors, coarse_error_series
from euler_ode import output_adapters

# Configure basic logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

# ==============================================================================
# SECTION 1: RUN CONFIGURATION
# ==============================================================================

class RunConfiguration(NamedTuple):
    t0: float
    y0: float
    t_end: float
    n: int


def run_configuration(config: RunConfiguration):
    """Runs Euler and samples the analytic solution for one configuration."""
    system = ForcedDecaySystem(t0=config.t0, y0=config.y0)
    t_euler, y_euler = system.solve_euler(config.t_end, config.n)
    y_exact = system.solve_analytical(t_euler)
    errors = error_series(y_euler, y_exact)
    logging.info(f"n={config.n}: max |error| = {np.nanmax(np.abs(errors)):.6e}")
    return {'t': t_euler, 'euler': y_euler, 'analytic': y_exact, 'error': errors}


def run_pipeline(coarse: RunConfiguration, fine: RunConfiguration, tolerance: float = ALIGNMENT_TOLERANCE):
    """
    Runs the coarse and fine configurations and lines the coarse run up with the fine grid.
    Both runs must share t0, y0 and t_end.
    """
    if (coarse.t0, coarse.y0, coarse.t_end) != (fine.t0, fine.y0, fine.t_end):
        raise InvalidArgument("Coarse and fine runs must share t0, y0 and t_end.")
    if coarse.n >= fine.n:
        raise InvalidArgument(f"Coarse run must use fewer steps than the fine run, got {coarse.n} >= {fine.n}.")

    coarse_run = run_configuration(coarse)
    fine_run = run_configuration(fine)

    residual = analytic_residual(fine_run['t'])
    logging.info(f"Analytic solution residual on fine grid: max |r| = {np.max(np.abs(residual)):.3e}")

    aligned_values = align_to_grid(fine_run['t'], coarse_run['t'], coarse_run['euler'], tolerance=tolerance)
    aligned_errors = align_errors(fine_run['t'], coarse_run['t'], coarse_run['euler'],
                                  solution=y_analytic, tolerance=tolerance)
    return {
        'coarse': coarse_run,
        'fine': fine_run,
        'aligned_values': aligned_values,
        'aligned_errors': aligned_errors,
    }


# ==============================================================================
# SECTION 2: OUTPUT
# ==============================================================================

def write_outputs(results, coarse: RunConfiguration, fine: RunConfiguration, output_dir: str, plots: bool = True):
    c, f = results['coarse'], results['fine']
    path = lambda name: output_adapters.output_path(output_dir, name)

    output_adapters.write_run_csv(c['t'], c['analytic'], c['euler'], coarse.n, path(f"results_n{coarse.n}.csv"))
    output_adapters.write_run_csv(f['t'], f['analytic'], f['euler'], fine.n, path(f"results_n{fine.n}.csv"))
    output_adapters.write_wide_csv(f['t'], f['analytic'], results['aligned_values'], f['euler'],
                                   coarse.n, fine.n, path("results_combined.csv"))
    output_adapters.write_error_csv(f['t'], results['aligned_errors'], f['error'],
                                    coarse.n, fine.n, path("errors.csv"))

    if plots:
        output_adapters.plot_solutions(f['t'], f['analytic'], c['t'], c['euler'], f['t'], f['euler'],
                                       coarse.n, fine.n, path("solutions.png"))
        output_adapters.plot_errors(c['t'], coarse_error_series(c['t'], c['euler']), f['t'], f['error'],
                                    coarse.n, fine.n, path("errors.png"))


# ==============================================================================
# SECTION 3: MAIN EXECUTION BLOCK
# ==============================================================================

def _positive_int(value):
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}")
    if n < 1:
        raise argparse.ArgumentTypeError(f"number of steps must be at least 1, got {n}")
    return n


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Solve y' = cos(t) - y with forward Euler and compare against the analytic solution.")
    parser.add_argument("--t0", type=float, default=0.0, help="Initial time.")
    parser.add_argument("--y0", type=float, default=1.0, help="Initial value.")
    parser.add_argument("--t-end", type=float, default=5.0, help="End time.")
    parser.add_argument("--coarse-n", type=_positive_int, default=20, help="Number of steps for the coarse run.")
    parser.add_argument("--fine-n", type=_positive_int, default=1000, help="Number of steps for the fine run.")
    parser.add_argument("--tolerance", type=float, default=ALIGNMENT_TOLERANCE,
                        help="Largest time difference at which a coarse and a fine sample are the same instant.")
    parser.add_argument("--output-dir", default=".", help="Directory to write CSV files and plots to.")
    parser.add_argument("--no-plots", action="store_true", help="Only write the CSV files.")
    parser.add_argument("--quiet", action="store_true", help="Only log warnings and errors.")
    args = parser.parse_args(argv)
    if not args.t_end > args.t0:
        parser.error(f"--t-end must be greater than --t0 (got t0={args.t0}, t_end={args.t_end})")
    if args.coarse_n >= args.fine_n:
        parser.error(f"--coarse-n must be smaller than --fine-n (got {args.coarse_n} and {args.fine_n})")
    return args


def main(argv: Optional[Sequence[str]] = None):
    args = parse_args(argv)
    if args.quiet:
        logging.getLogger().setLevel(logging.WARNING)

    coarse = RunConfiguration(t0=args.t0, y0=args.y0, t_end=args.t_end, n=args.coarse_n)
    fine = RunConfiguration(t0=args.t0, y0=args.y0, t_end=args.t_end, n=args.fine_n)

    results = run_pipeline(coarse, fine, tolerance=args.tolerance)
    write_outputs(results, coarse, fine, os.path.abspath(args.output_dir), plots=not args.no_plots)


if __name__ == "__main__":
    main()
