"""
Exact polynomial solver.

Minimizes (1/N) ||Xw - y||^2 + lambda ||w||^2 in closed form, X being the
Vandermonde matrix of the point abscissae. Setting the gradient to zero gives

    (X^T X / N + lambda * I) w = X^T y / N

When that system is singular (more coefficients than distinct points and no
penalty) the minimum-norm least-squares solution is used instead.
"""

import numpy as np

from .config import Settings, require_positive_count
from .curve_model import Dataset, EmptyDatasetError, compute_loss, design_matrix, points_to_arrays
from .logging_config import get_logger
from .optimizer_base import Optimizer

logger = get_logger(__name__)


def solve_weights(points: Dataset, num_weights: int, weight_penalty: float = 0.0) -> np.ndarray:
    """
    Closed-form loss minimizer.

    Args:
        points: Dataset to fit
        num_weights: Number of polynomial coefficients
        weight_penalty: L2 coefficient lambda (ignored when not positive)

    Returns:
        Coefficients, shape (num_weights,)

    Raises:
        EmptyDatasetError: if points is empty
    """
    require_positive_count("num_weights", num_weights)
    xs, ys = points_to_arrays(points)
    n = xs.shape[0]
    if n == 0:
        raise EmptyDatasetError("Cannot solve for a curve through an empty point set")

    X = design_matrix(xs, num_weights)
    lam = weight_penalty if weight_penalty > 0 else 0.0
    # (num_weights, num_weights) system
    A = X.T @ X / n + lam * np.eye(num_weights)
    b = X.T @ ys / n
    try:
        if np.linalg.matrix_rank(A) < num_weights:
            raise np.linalg.LinAlgError("normal equations are rank deficient")
        return np.linalg.solve(A, b)
    except np.linalg.LinAlgError:
        w, _, _, _ = np.linalg.lstsq(X, ys, rcond=None)
        return w


class PolynomialSolver(Optimizer):
    """Jumps straight to the optimum on every step."""

    ALGORITHM_ID = "polynomial-solver"

    def initialize(self, num_weights: int, points: Dataset, weight_penalty: float) -> None:
        """Start from a random curve so the first step visibly snaps to the optimum."""
        require_positive_count("num_weights", num_weights)
        self.load_weights([self._random_weights(num_weights)], points, weight_penalty)

    def step(self, points: Dataset, weight_penalty: float) -> None:
        if self._skip_if_uninitialized("step"):
            return
        curve = self._curves[0]
        curve.weights = solve_weights(points, curve.num_weights, weight_penalty)
        curve.loss = compute_loss(curve.weights, points, weight_penalty)
        logger.debug("solved %d coefficients: loss=%.6g", curve.num_weights, curve.loss)

    def setup(self, settings: Settings, points: Dataset) -> None:
        self.initialize(settings.num_weights, points, settings.weight_penalty)

    def advance(self, settings: Settings, points: Dataset) -> None:
        self.step(points, settings.weight_penalty)
