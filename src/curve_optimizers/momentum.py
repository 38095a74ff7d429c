"""
Momentum (heavy-ball) gradient descent.

    v <- beta * v + g
    w <- w - lr * v

The velocity starts at zero and is reset whenever the curve is regenerated.
"""

import numpy as np
from typing import Optional

from .config import Settings, require_positive_count
from .curve_model import Dataset, compute_loss, loss_gradient
from .logging_config import get_logger
from .optimizer_base import Optimizer

logger = get_logger(__name__)


class MomentumOptimizer(Optimizer):
    """Single-curve gradient descent with a velocity accumulator."""

    ALGORITHM_ID = "momentum"

    def __init__(self, seed: Optional[int] = None):
        super().__init__(seed)
        self.velocity: Optional[np.ndarray] = None

    def initialize(self, num_weights: int, points: Dataset, weight_penalty: float) -> None:
        require_positive_count("num_weights", num_weights)
        self.load_weights([self._random_weights(num_weights)], points, weight_penalty)

    def _reset_auxiliary(self) -> None:
        self.velocity = np.zeros(self._curves[0].num_weights)

    def step(
        self,
        learning_rate: float,
        beta: float,
        points: Dataset,
        weight_penalty: float,
    ) -> None:
        if self._skip_if_uninitialized("step"):
            return
        curve = self._curves[0]
        gradient = loss_gradient(curve.weights, points, weight_penalty)
        self.velocity = beta * self.velocity + gradient
        curve.weights = curve.weights - learning_rate * self.velocity
        curve.loss = compute_loss(curve.weights, points, weight_penalty)
        logger.debug("momentum step: |v|=%.4g loss=%.6g", np.linalg.norm(self.velocity), curve.loss)

    def setup(self, settings: Settings, points: Dataset) -> None:
        self.initialize(settings.num_weights, points, settings.weight_penalty)

    def advance(self, settings: Settings, points: Dataset) -> None:
        cfg = settings.momentum
        self.step(cfg.learning_rate, cfg.beta, points, settings.weight_penalty)
