"""
Curve Optimizers Demo -- every algorithm fitting a polynomial to the same points.

Generates:
- viz/*.png -- Individual visualization files
- report.pdf -- Comprehensive PDF report
"""

import os
import sys
from pathlib import Path

import numpy as np
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "src"))

from curve_optimizers.config import Settings
from curve_optimizers.curve_model import Point, evaluate_weights
from curve_optimizers.driver import OptimizerDriver
from curve_optimizers.logging_config import setup_logging
from curve_optimizers.registry import (
    ALGORITHM_ORDER,
    create_optimizer,
    get_algorithm_color,
    get_algorithm_info,
)

SEED = 42
STEPS = 300

VIZ_DIR = Path(__file__).parent / "viz"
VIZ_DIR.mkdir(exist_ok=True)


def sample_points(n=8, noise=0.1):
    """Noisy samples of a cubic on [-1, 1]."""
    rng = np.random.default_rng(SEED)
    xs = np.sort(rng.uniform(-1.0, 1.0, n))
    ys = 0.3 - 0.8 * xs + 0.2 * xs ** 2 + 0.9 * xs ** 3 + noise * rng.normal(size=n)
    return [Point(float(x), float(y)) for x, y in zip(xs, ys)]


def run_all(points, settings, steps):
    drivers = {}
    for algorithm_id in ALGORITHM_ORDER:
        driver = OptimizerDriver(create_optimizer(algorithm_id, seed=SEED), settings, points)
        driver.run(steps)
        print(f"  {driver.summary()}")
        drivers[algorithm_id] = driver
    return drivers


# ---------------------------------------------------------------------------
# Example 1: loss history per algorithm
# ---------------------------------------------------------------------------

def example_1_loss_histories(points, settings):
    print("=" * 60)
    print("Example 1: Best loss per step, all algorithms")
    print("=" * 60)

    drivers = run_all(points, settings, STEPS)

    fig, ax = plt.subplots(figsize=(10, 6))
    for algorithm_id, driver in drivers.items():
        ax.semilogy(driver.history, color=get_algorithm_color(algorithm_id),
                    linewidth=1.5, label=get_algorithm_info(algorithm_id).name)
    ax.set_xlabel("Step")
    ax.set_ylabel("Best loss (log scale)")
    ax.set_title(f"Loss History ({settings.num_weights} coefficients)")
    ax.legend(fontsize=8)
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "01_loss_histories.png", dpi=150)
    plt.close(fig)

    print("  Saved: viz/01_loss_histories.png\n")
    return drivers


# ---------------------------------------------------------------------------
# Example 2: fitted curves
# ---------------------------------------------------------------------------

def example_2_fitted_curves(points, drivers):
    print("=" * 60)
    print("Example 2: Best curve found by each algorithm")
    print("=" * 60)

    xs = np.array([p.x for p in points])
    ys = np.array([p.y for p in points])
    grid = np.linspace(-1.1, 1.1, 200)

    fig, axes = plt.subplots(2, 4, figsize=(16, 8), sharex=True, sharey=True)
    for ax, (algorithm_id, driver) in zip(axes.ravel(), drivers.items()):
        best = driver.best_curve
        ax.plot(grid, evaluate_weights(best.weights, grid),
                color=get_algorithm_color(algorithm_id), linewidth=2)
        ax.scatter(xs, ys, color="black", s=15, zorder=5)
        ax.set_title(f"{get_algorithm_info(algorithm_id).name}\nloss={best.loss:.3e}", fontsize=10)
        ax.set_ylim(-2.0, 2.0)
        ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "02_fitted_curves.png", dpi=150)
    plt.close(fig)

    print("  Saved: viz/02_fitted_curves.png\n")


# ---------------------------------------------------------------------------
# Example 3: weight penalty shrinks the exact solution
# ---------------------------------------------------------------------------

def example_3_weight_penalty(points):
    print("=" * 60)
    print("Example 3: Effect of weight penalty on the exact solution")
    print("=" * 60)

    penalties = [0.0, 0.01, 0.1, 0.5]
    grid = np.linspace(-1.1, 1.1, 200)

    fig, ax = plt.subplots(figsize=(10, 6))
    for penalty in penalties:
        settings = Settings(num_weights=8, weight_penalty=penalty)
        driver = OptimizerDriver(create_optimizer("polynomial-solver", seed=SEED), settings, points)
        best = driver.run(1)
        norm = float(np.linalg.norm(best.weights))
        print(f"  penalty={penalty:<5} |w|={norm:.4f}  loss={best.loss:.4e}")
        ax.plot(grid, evaluate_weights(best.weights, grid), linewidth=1.5,
                label=f"penalty={penalty} (|w|={norm:.2f})")
    ax.scatter([p.x for p in points], [p.y for p in points], color="black", s=15, zorder=5)
    ax.set_ylim(-2.0, 2.0)
    ax.set_title("Ridge Solutions, 8 Coefficients")
    ax.legend(fontsize=8)
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "03_weight_penalty.png", dpi=150)
    plt.close(fig)

    print("  Saved: viz/03_weight_penalty.png\n")


# ---------------------------------------------------------------------------
# PDF report
# ---------------------------------------------------------------------------

def generate_pdf_report():
    print("=" * 60)
    print("Generating PDF report...")
    print("=" * 60)

    pdf_path = Path(__file__).parent / "report.pdf"

    with PdfPages(pdf_path) as pdf:
        fig, ax = plt.subplots(figsize=(10, 7))
        ax.axis("off")
        ax.text(0.5, 0.7, "Curve Optimizers Demo", transform=ax.transAxes,
                ha="center", va="center", fontsize=32, fontweight="bold")
        ax.text(0.5, 0.55, "Eight ways to fit a polynomial", transform=ax.transAxes,
                ha="center", va="center", fontsize=18, color="gray")
        ax.text(0.5, 0.4, f"Seed: {SEED}, steps: {STEPS}", transform=ax.transAxes,
                ha="center", va="center", fontsize=12, color="gray")
        fig.tight_layout()
        pdf.savefig(fig)
        plt.close(fig)

        viz_files = sorted(VIZ_DIR.glob("*.png"))
        for viz_file in viz_files:
            img = plt.imread(str(viz_file))
            fig, ax = plt.subplots(figsize=(12, 8))
            ax.imshow(img)
            ax.axis("off")
            ax.set_title(viz_file.stem.replace("_", " ").title(), fontsize=14, pad=10)
            fig.tight_layout()
            pdf.savefig(fig)
            plt.close(fig)

    print(f"  Saved: report.pdf ({len(list(VIZ_DIR.glob('*.png'))) + 1} pages)")


def main():
    setup_logging(level="INFO", console=True)

    print()
    print("*" * 60)
    print("  CURVE OPTIMIZERS DEMO")
    print("*" * 60)
    print()

    points = sample_points()
    settings = Settings(num_weights=4)

    drivers = example_1_loss_histories(points, settings)
    example_2_fitted_curves(points, drivers)
    example_3_weight_penalty(points)

    generate_pdf_report()

    print()
    print("=" * 60)
    print("All examples complete.")
    print(f"  Visualizations: {VIZ_DIR}/")
    print(f"  PDF report:     {Path(__file__).parent / 'report.pdf'}")
    print("=" * 60)


if __name__ == "__main__":
    main()
