"""
Plot the cost and accuracy of the matrix exponential action over time.

For one random matrix A, this script sweeps the time scale t and shows:
- The selected Taylor degree m and number of stages s
- The number of products with A (selected m * s, and actually performed
  with early termination)
- The relative error of exp(t A) B against the dense scipy reference

Usage:
    python scripts/plot_action_cost.py
"""

import numpy as np
import matplotlib.pyplot as plt
from matplotlib import rcParams

# Add parent directory to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from expm_action import MatrixExpActionHandler
from expm_action.analysis import cost_profile, relative_error

# =============================================================================
# Plot Configuration - EDIT THESE PARAMETERS
# =============================================================================

# Problem parameters
N = 50                  # Matrix dimension
N_COLUMNS = 4           # Columns of the operand B
SEED = 1234
SHIFT = False           # Shift A by trace(A)/n before selection

# Time range
T_MIN = 1e-3
T_MAX = 1e2
N_TIME_POINTS = 60

# Plot styling
FIGURE_SIZE = (10, 8)
DPI = 150
FONT_SIZE = 12
LINE_WIDTH = 2.0

# Output
SAVE_FIGURE = True
OUTPUT_PATH = 'figures/action_cost_vs_time.pdf'


# =============================================================================
# Main Plotting
# =============================================================================

def main():
    rcParams['font.size'] = FONT_SIZE
    rcParams['axes.linewidth'] = 1.2

    rng = np.random.default_rng(SEED)
    A = rng.standard_normal((N, N)) / np.sqrt(N)
    B = rng.standard_normal((N, N_COLUMNS))

    handler = MatrixExpActionHandler(shift=SHIFT)
    times = np.logspace(np.log10(T_MIN), np.log10(T_MAX), N_TIME_POINTS)

    print(f"Matrix dimension: n = {N}, operand columns: p = {N_COLUMNS}")
    print(f"||A||_1 = {np.linalg.norm(A, 1):.3f}")
    print()

    records = cost_profile(A, times, n_columns=N_COLUMNS, handler=handler)
    performed = []
    errors = []
    for t in times:
        _, info = handler.action(A, B, t, return_info=True)
        performed.append(info.n_products)
        errors.append(relative_error(A, B, t, handler=handler))

    for rec, n_prod, err in list(zip(records, performed, errors))[::10]:
        print(f"t = {rec.t:9.3e}: m = {rec.m:2d}, s = {rec.s:4d}, "
              f"products = {n_prod:5d} / {rec.cost:5d}, rel. error = {err:.2e}")

    fig, (ax_cost, ax_err) = plt.subplots(2, 1, figsize=FIGURE_SIZE, sharex=True)

    ax_cost.loglog(times, [rec.cost for rec in records], '-', color='#1f77b4',
                   linewidth=LINE_WIDTH, label=r'selected $m \cdot s$')
    ax_cost.loglog(times, performed, '--', color='#d62728',
                   linewidth=LINE_WIDTH, label='performed (early termination)')
    ax_cost.loglog(times, [rec.s for rec in records], ':', color='#2ca02c',
                   linewidth=LINE_WIDTH, label=r'stages $s$')
    ax_cost.set_ylabel('Products with $A$')
    ax_cost.legend(loc='best', framealpha=0.9)
    ax_cost.grid(True, alpha=0.3, which='both')

    ax_err.loglog(times, np.maximum(errors, 1e-18), 'o-', color='#333333',
                  linewidth=1.0, markersize=3)
    ax_err.axhline(2.0 ** -53, color='gray', linestyle='--', label='unit roundoff')
    ax_err.set_xlabel(r'Time scale $t$')
    ax_err.set_ylabel(r'Relative error vs. dense $e^{tA}B$')
    ax_err.legend(loc='best', framealpha=0.9)
    ax_err.grid(True, alpha=0.3, which='both')

    fig.suptitle(f'Action of the matrix exponential ($n = {N}$, $p = {N_COLUMNS}$)')
    plt.tight_layout()

    if SAVE_FIGURE:
        output_dir = Path(__file__).parent.parent / 'figures'
        output_dir.mkdir(exist_ok=True)
        output_path = Path(__file__).parent.parent / OUTPUT_PATH
        fig.savefig(output_path, dpi=DPI, bbox_inches='tight')
        print(f"\nFigure saved to: {output_path}")

    plt.show()


if __name__ == '__main__':
    main()
