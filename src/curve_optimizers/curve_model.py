"""
Polynomial curve model -- evaluation, loss and gradient.

A curve is a polynomial y = sum_i w_i * x^i stored as its coefficient vector
(coefficient of x^i at index i). Loss is mean squared error over a point set
plus an optional L2 penalty lambda * sum(w_i^2), which is added to the MSE
rather than averaged with it.
"""

import numpy as np
from dataclasses import dataclass
from typing import NamedTuple, Sequence, Tuple, Union

from numpy.polynomial import polynomial as P


class EmptyDatasetError(ValueError):
    """Raised when a loss or gradient is requested over zero points."""

    def __init__(self, message: str = "Cannot compute loss over an empty point set"):
        super().__init__(message)


class Point(NamedTuple):
    """A ground-truth sample the curve is fit against."""

    x: float
    y: float


@dataclass
class Curve:
    """A polynomial fit candidate and its cached loss."""

    id: int
    weights: np.ndarray
    loss: float = float("nan")

    def __post_init__(self):
        self.weights = np.array(self.weights, dtype=np.float64)

    @property
    def num_weights(self) -> int:
        return self.weights.shape[0]

    def copy(self) -> "Curve":
        return Curve(self.id, self.weights.copy(), self.loss)


Dataset = Sequence[Point]


def points_to_arrays(points: Dataset) -> Tuple[np.ndarray, np.ndarray]:
    """
    Split a point sequence into x and y arrays.

    Returns:
        Tuple (xs, ys), each of shape (n_points,)
    """
    if len(points) == 0:
        return np.zeros(0), np.zeros(0)
    data = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    return data[:, 0], data[:, 1]


def design_matrix(xs: np.ndarray, num_weights: int) -> np.ndarray:
    """Vandermonde matrix with columns x^0 .. x^(num_weights-1), shape (n, num_weights)."""
    return np.vander(xs, num_weights, increasing=True)


def evaluate_weights(weights: np.ndarray, x: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """Horner evaluation of sum_i weights[i] * x^i."""
    if len(weights) == 0:
        return np.zeros_like(np.asarray(x, dtype=np.float64)) if np.ndim(x) else 0.0
    return P.polyval(x, weights)


def evaluate(curve: Curve, x: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """
    Evaluate a curve at x.

    Args:
        curve: Curve to evaluate
        x: Scalar or array of abscissae

    Returns:
        y with the same shape as x
    """
    return evaluate_weights(curve.weights, x)


def l2_penalty(weights: np.ndarray, weight_penalty: float) -> float:
    """L2 penalty weight_penalty * sum(w_i^2), zero when the penalty is not positive."""
    if weight_penalty > 0:
        return float(weight_penalty * np.sum(weights ** 2))
    return 0.0


def compute_loss(weights: np.ndarray, points: Dataset, weight_penalty: float = 0.0) -> float:
    """
    Mean squared error of a coefficient vector over points, plus L2 penalty.

    Raises:
        EmptyDatasetError: if points is empty
    """
    xs, ys = points_to_arrays(points)
    n = xs.shape[0]
    if n == 0:
        raise EmptyDatasetError()
    residuals = evaluate_weights(weights, xs) - ys
    mse = float(np.sum(residuals ** 2) / n)
    return mse + l2_penalty(weights, weight_penalty)


def loss(curve: Curve, points: Dataset, weight_penalty: float = 0.0) -> float:
    """Loss of a curve; see compute_loss."""
    return compute_loss(curve.weights, points, weight_penalty)


def loss_gradient(weights: np.ndarray, points: Dataset, weight_penalty: float = 0.0) -> np.ndarray:
    """
    Gradient of the loss with respect to each coefficient.

    dL/dw_i = sum_points 2 * error * x^i / N  (+ 2 * lambda * w_i when lambda > 0)

    Args:
        weights: Coefficients, shape (num_weights,)
        points: Dataset
        weight_penalty: L2 coefficient lambda

    Returns:
        Gradient, shape (num_weights,)

    Raises:
        EmptyDatasetError: if points is empty
    """
    xs, ys = points_to_arrays(points)
    n = xs.shape[0]
    if n == 0:
        raise EmptyDatasetError("Cannot compute gradient over an empty point set")
    X = design_matrix(xs, weights.shape[0])
    error = X @ weights - ys
    # (num_weights, n) @ (n,) -> (num_weights,)
    grad = 2.0 * (X.T @ error) / n
    if weight_penalty > 0:
        grad = grad + 2.0 * weight_penalty * weights
    return grad


def refresh_curve_loss(curve: Curve, points: Dataset, weight_penalty: float) -> float:
    """Recompute and store a curve's loss; returns the new value."""
    curve.loss = loss(curve, points, weight_penalty)
    return curve.loss
