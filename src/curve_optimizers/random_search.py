"""
Random search baseline.

Every step draws a fresh batch of independent random curves. The batch is the
visible population; the lowest-loss curve ever drawn is kept separately.
"""

from typing import Optional

from .config import Settings, require_positive_count
from .curve_model import Curve, Dataset, compute_loss
from .logging_config import get_logger
from .optimizer_base import Optimizer, best_index

logger = get_logger(__name__)


class RandomSearchOptimizer(Optimizer):
    ALGORITHM_ID = "random-search"
    SINGLE_CURVE = False

    def __init__(self, seed: Optional[int] = None):
        super().__init__(seed)
        self.best: Optional[Curve] = None

    def initialize(
        self,
        num_curves: int,
        num_weights: int,
        points: Dataset,
        weight_penalty: float,
    ) -> None:
        require_positive_count("num_curves", num_curves)
        require_positive_count("num_weights", num_weights)
        self.load_weights(
            [self._random_weights(num_weights) for _ in range(num_curves)],
            points,
            weight_penalty,
        )

    def _reset_auxiliary(self) -> None:
        self.best = self._curves[best_index(self._curves)].copy()

    @property
    def best_curve(self) -> Optional[Curve]:
        return self.best

    def _keep_if_better(self, candidate: Curve) -> None:
        if candidate.loss < self.best.loss:
            self.best = candidate.copy()

    def step(
        self,
        num_curves: int,
        num_weights: int,
        points: Dataset,
        weight_penalty: float,
    ) -> None:
        if self._skip_if_uninitialized("step"):
            return
        require_positive_count("num_curves", num_curves)
        require_positive_count("num_weights", num_weights)
        self.refresh_loss(points, weight_penalty)
        if self.best.num_weights != num_weights:
            # a different coefficient count makes the old best incomparable
            self.best = None
        self._curves = [
            self._new_curve(self._random_weights(num_weights), points, weight_penalty)
            for _ in range(num_curves)
        ]
        batch_best = self._curves[best_index(self._curves)]
        if self.best is None:
            self.best = batch_best.copy()
        else:
            self._keep_if_better(batch_best)
        logger.debug("random batch best=%.6g overall best=%.6g", batch_best.loss, self.best.loss)

    def refresh_loss(self, points: Dataset, weight_penalty: float) -> None:
        if self._skip_if_uninitialized("refresh_loss"):
            return
        super().refresh_loss(points, weight_penalty)
        self.best.loss = compute_loss(self.best.weights, points, weight_penalty)
        self._keep_if_better(self._curves[best_index(self._curves)])

    def setup(self, settings: Settings, points: Dataset) -> None:
        self.initialize(
            settings.random_search.num_curves,
            settings.num_weights,
            points,
            settings.weight_penalty,
        )

    def advance(self, settings: Settings, points: Dataset) -> None:
        self.step(
            settings.random_search.num_curves,
            settings.num_weights,
            points,
            settings.weight_penalty,
        )
