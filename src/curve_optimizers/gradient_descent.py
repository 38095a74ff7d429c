"""
Gradient descent with optional gradient-noise injection.

Each step computes the exact MSE + L2 gradient over the whole point set, then
(when stochasticity > 0) perturbs every component with zero-mean Gaussian
noise whose standard deviation is |g_i| * stochasticity, and finally moves
w <- w - lr * g.
"""

import numpy as np

from .config import Settings, require_positive_count
from .curve_model import Dataset, compute_loss, loss_gradient
from .logging_config import get_logger
from .optimizer_base import Optimizer
from .sampling import random_normal

logger = get_logger(__name__)


class GradientDescentOptimizer(Optimizer):
    """Single-curve gradient descent."""

    ALGORITHM_ID = "gradient"

    def initialize(self, num_weights: int, points: Dataset, weight_penalty: float) -> None:
        """Draw a random curve and discard any previous state."""
        require_positive_count("num_weights", num_weights)
        self.load_weights([self._random_weights(num_weights)], points, weight_penalty)

    def _noisy_gradient(self, gradient: np.ndarray, stochasticity: float) -> np.ndarray:
        if stochasticity <= 0:
            return gradient
        noise = random_normal(self.rng, 0.0, np.abs(gradient) * stochasticity, size=gradient.shape)
        return gradient + noise

    def step(
        self,
        learning_rate: float,
        stochasticity: float,
        points: Dataset,
        weight_penalty: float,
    ) -> None:
        """
        Take one gradient step.

        Args:
            learning_rate: Step size
            stochasticity: Relative magnitude of injected gradient noise
            points: Dataset to fit
            weight_penalty: L2 coefficient
        """
        if self._skip_if_uninitialized("step"):
            return
        curve = self._curves[0]
        gradient = loss_gradient(curve.weights, points, weight_penalty)
        gradient = self._noisy_gradient(gradient, stochasticity)
        curve.weights = curve.weights - learning_rate * gradient
        curve.loss = compute_loss(curve.weights, points, weight_penalty)
        logger.debug("gradient step: |g|=%.4g loss=%.6g", np.linalg.norm(gradient), curve.loss)

    def setup(self, settings: Settings, points: Dataset) -> None:
        self.initialize(settings.num_weights, points, settings.weight_penalty)

    def advance(self, settings: Settings, points: Dataset) -> None:
        cfg = settings.gradient
        self.step(cfg.learning_rate, cfg.stochasticity, points, settings.weight_penalty)
