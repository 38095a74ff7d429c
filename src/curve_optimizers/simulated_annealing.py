"""
Simulated annealing over polynomial coefficients.

Each step runs a fixed number of proposals. A proposal perturbs every
coefficient of the current curve with N(0, T^2); it is accepted when the loss
does not increase, otherwise with probability exp(-delta / T). The
temperature is multiplied by the cooling rate after every proposal.
"""

import math
import numpy as np
from typing import Optional

from .config import RANGES, Settings, require_positive_count
from .curve_model import Curve, Dataset, compute_loss
from .logging_config import get_logger
from .optimizer_base import Optimizer
from .sampling import random_normal

logger = get_logger(__name__)


def acceptance_probability(delta: float, temperature: float) -> float:
    """Metropolis criterion: 1 for improvements, exp(-delta/T) otherwise."""
    if delta <= 0:
        return 1.0
    if temperature <= 0:
        return 0.0
    return math.exp(-delta / temperature)


class SimulatedAnnealingOptimizer(Optimizer):
    """Single-curve annealing with geometric cooling; remembers the best curve seen."""

    ALGORITHM_ID = "simulated-annealing"

    def __init__(self, seed: Optional[int] = None):
        super().__init__(seed)
        self.initial_temperature = RANGES["sa_initial_temperature"].default
        self.temperature = self.initial_temperature
        self.best: Optional[Curve] = None

    def initialize(
        self,
        num_weights: int,
        points: Dataset,
        weight_penalty: float,
        initial_temperature: Optional[float] = None,
    ) -> None:
        """Draw a random curve and reheat to the initial temperature."""
        require_positive_count("num_weights", num_weights)
        if initial_temperature is not None:
            self.initial_temperature = initial_temperature
        self.load_weights([self._random_weights(num_weights)], points, weight_penalty)

    def _reset_auxiliary(self) -> None:
        self.temperature = self.initial_temperature
        self.best = self._curves[0].copy()

    @property
    def best_curve(self) -> Optional[Curve]:
        return self.best

    def step(
        self,
        cooling_rate: float,
        iterations: int,
        points: Dataset,
        weight_penalty: float,
    ) -> None:
        """
        Run `iterations` proposals against the current curve.

        Cached losses are re-scored against `points` first.

        Args:
            cooling_rate: Factor applied to the temperature after each proposal
            iterations: Number of proposals in this step
            points: Dataset to fit
            weight_penalty: L2 coefficient
        """
        if self._skip_if_uninitialized("step"):
            return
        require_positive_count("iterations", iterations)
        self.refresh_loss(points, weight_penalty)
        curve = self._curves[0]
        accepted = 0
        for _ in range(iterations):
            candidate = curve.weights + random_normal(
                self.rng, 0.0, abs(self.temperature), size=curve.num_weights
            )
            candidate_loss = compute_loss(candidate, points, weight_penalty)
            delta = candidate_loss - curve.loss
            if self.rng.random() < acceptance_probability(delta, self.temperature):
                curve.weights = candidate
                curve.loss = candidate_loss
                accepted += 1
                if curve.loss < self.best.loss:
                    self.best = curve.copy()
            self.temperature *= cooling_rate
        logger.debug(
            "annealing step: accepted %d/%d, T=%.4g, loss=%.6g",
            accepted,
            iterations,
            self.temperature,
            curve.loss,
        )

    def refresh_loss(self, points: Dataset, weight_penalty: float) -> None:
        if self._skip_if_uninitialized("refresh_loss"):
            return
        super().refresh_loss(points, weight_penalty)
        self.best.loss = compute_loss(self.best.weights, points, weight_penalty)
        if self._curves[0].loss < self.best.loss:
            self.best = self._curves[0].copy()

    def setup(self, settings: Settings, points: Dataset) -> None:
        self.initialize(
            settings.num_weights,
            points,
            settings.weight_penalty,
            settings.simulated_annealing.initial_temperature,
        )

    def advance(self, settings: Settings, points: Dataset) -> None:
        cfg = settings.simulated_annealing
        self.step(cfg.cooling_rate, cfg.iterations, points, settings.weight_penalty)
