"""
Mutation hill-climbing over a population of curves.

Each generation keeps only the single best curve of the previous population
as parent and replaces the whole population with mutated copies of it:
(1, lambda) truncation selection with Gaussian mutation and no crossover.
"""

import numpy as np

from .config import Settings, require_positive_count
from .curve_model import Curve, Dataset
from .logging_config import get_logger
from .optimizer_base import Optimizer, best_index
from .sampling import random_normal

logger = get_logger(__name__)


def resize_weights(weights: np.ndarray, num_weights: int) -> np.ndarray:
    """Truncate or zero-pad a coefficient vector; padding keeps the polynomial unchanged."""
    if weights.shape[0] >= num_weights:
        return weights[:num_weights].copy()
    return np.concatenate([weights, np.zeros(num_weights - weights.shape[0])])


class EvolutionaryOptimizer(Optimizer):
    """Population-based mutation search seeded from one elite parent per generation."""

    ALGORITHM_ID = "genetic"
    SINGLE_CURVE = False

    @property
    def population(self):
        return self.curves

    def initialize(
        self,
        population_size: int,
        num_weights: int,
        points: Dataset,
        weight_penalty: float,
    ) -> None:
        """Draw population_size independent random curves."""
        require_positive_count("population_size", population_size)
        require_positive_count("num_weights", num_weights)
        self.load_weights(
            [self._random_weights(num_weights) for _ in range(population_size)],
            points,
            weight_penalty,
        )

    def select_parent(self) -> Curve:
        """Minimum-loss member, first in population order on ties."""
        return self._curves[best_index(self._curves)]

    def step(
        self,
        population_size: int,
        num_weights: int,
        mutation_variance: float,
        points: Dataset,
        weight_penalty: float,
    ) -> None:
        """
        Produce one generation.

        Args:
            population_size: Number of children to create
            num_weights: Coefficient count of each child
            mutation_variance: Variance of the Gaussian added to every coefficient
            points: Dataset to fit
            weight_penalty: L2 coefficient
        """
        if self._skip_if_uninitialized("step") or not self._curves:
            return
        require_positive_count("population_size", population_size)
        require_positive_count("num_weights", num_weights)

        parent = self.select_parent()
        parent_weights = resize_weights(parent.weights, num_weights)
        std_dev = np.sqrt(max(mutation_variance, 0.0))

        children = []
        for _ in range(population_size):
            mutation = random_normal(self.rng, 0.0, std_dev, size=num_weights)
            children.append(self._new_curve(parent_weights + mutation, points, weight_penalty))
        self._curves = children
        logger.debug(
            "generation from parent %d (loss=%.6g): best child loss=%.6g",
            parent.id,
            parent.loss,
            self.best_curve.loss,
        )

    def setup(self, settings: Settings, points: Dataset) -> None:
        self.initialize(
            settings.genetic.population_size,
            settings.num_weights,
            points,
            settings.weight_penalty,
        )

    def advance(self, settings: Settings, points: Dataset) -> None:
        cfg = settings.genetic
        self.step(
            cfg.population_size,
            settings.num_weights,
            cfg.mutation_variance,
            points,
            settings.weight_penalty,
        )
