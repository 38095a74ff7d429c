"""
Adam optimizer for a single polynomial curve.

Keeps exponentially decayed estimates of the gradient mean (m) and of the
mean of squared gradients (v), corrects both for their zero initialization,
and scales each coefficient's step by 1 / (sqrt(v_hat) + eps):

    m_t = beta1 * m_{t-1} + (1 - beta1) * g_t
    v_t = beta2 * v_{t-1} + (1 - beta2) * g_t^2
    m_hat = m_t / (1 - beta1^t)
    v_hat = v_t / (1 - beta2^t)
    w <- w - lr * m_hat / (sqrt(v_hat) + eps)

eps sits outside the square root.
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional

from .config import Settings, require_positive_count
from .curve_model import Dataset, compute_loss, loss_gradient
from .logging_config import get_logger
from .optimizer_base import Optimizer

logger = get_logger(__name__)


@dataclass
class AdamState:
    """First/second moment estimates and completed-step counter."""

    m: np.ndarray
    v: np.ndarray
    t: int = 0

    @classmethod
    def zeros(cls, num_weights: int) -> "AdamState":
        return cls(np.zeros(num_weights), np.zeros(num_weights), 0)


class AdamOptimizer(Optimizer):
    """Single-curve Adam."""

    ALGORITHM_ID = "adam"

    def __init__(self, seed: Optional[int] = None):
        super().__init__(seed)
        self.adam_state: Optional[AdamState] = None

    def initialize(self, num_weights: int, points: Dataset, weight_penalty: float) -> None:
        """Draw a random curve and zero the moment estimates."""
        require_positive_count("num_weights", num_weights)
        self.load_weights([self._random_weights(num_weights)], points, weight_penalty)

    def _reset_auxiliary(self) -> None:
        self.adam_state = AdamState.zeros(self._curves[0].num_weights)

    def step(
        self,
        learning_rate: float,
        beta1: float,
        beta2: float,
        epsilon: float,
        points: Dataset,
        weight_penalty: float,
    ) -> None:
        """
        Take one Adam step.

        Args:
            learning_rate: Step size
            beta1: Decay rate for the first moment
            beta2: Decay rate for the second moment
            epsilon: Added to sqrt(v_hat) in the denominator
            points: Dataset to fit
            weight_penalty: L2 coefficient
        """
        if self._skip_if_uninitialized("step") or self.adam_state is None:
            return
        curve = self._curves[0]
        state = self.adam_state
        gradient = loss_gradient(curve.weights, points, weight_penalty)

        state.t += 1
        state.m = beta1 * state.m + (1 - beta1) * gradient
        state.v = beta2 * state.v + (1 - beta2) * gradient * gradient

        m_hat = state.m / (1 - beta1 ** state.t)
        v_hat = state.v / (1 - beta2 ** state.t)

        curve.weights = curve.weights - learning_rate * m_hat / (np.sqrt(v_hat) + epsilon)
        curve.loss = compute_loss(curve.weights, points, weight_penalty)
        logger.debug("adam step t=%d loss=%.6g", state.t, curve.loss)

    def setup(self, settings: Settings, points: Dataset) -> None:
        self.initialize(settings.num_weights, points, settings.weight_penalty)

    def advance(self, settings: Settings, points: Dataset) -> None:
        cfg = settings.adam
        self.step(
            cfg.learning_rate, cfg.beta1, cfg.beta2, cfg.epsilon, points, settings.weight_penalty
        )
