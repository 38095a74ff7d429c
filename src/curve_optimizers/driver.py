"""
Headless driver loop.

Holds one abstract optimizer handle and turns a caller-controlled cadence into
step() calls. A presentation layer would call tick() from its frame callback
and read optimizer.curves for drawing; tests and scripts call run().
"""

import math
from typing import List, Optional, Sequence

from .config import Settings
from .curve_model import Curve, Dataset, Point
from .formatters import scientific_notation
from .logging_config import get_logger
from .optimizer_base import Optimizer
from .registry import get_algorithm_info

logger = get_logger(__name__)


class OptimizerDriver:
    """Steps a single optimizer against a dataset and records its best loss."""

    def __init__(self, optimizer: Optimizer, settings: Settings, points: Sequence[Point]):
        self.optimizer = optimizer
        self.settings = settings
        self.points: List[Point] = [Point(*p) for p in points]
        self.history: List[float] = []
        self.steps_taken = 0
        self._pending_time = 0.0

    @property
    def best_curve(self) -> Optional[Curve]:
        return self.optimizer.best_curve

    def _record(self) -> None:
        best = self.optimizer.best_curve
        if best is not None:
            self.history.append(best.loss)

    def reset(self) -> None:
        """Regenerate the optimizer's initial curves and clear the history."""
        self.optimizer.setup(self.settings, self.points)
        self.history = []
        self.steps_taken = 0
        self._pending_time = 0.0
        self._record()

    def step(self) -> None:
        self.optimizer.advance(self.settings, self.points)
        self.steps_taken += 1
        self._record()

    def run(self, n_steps: int) -> Optional[Curve]:
        """
        Take n_steps steps, initializing first if needed.

        Returns:
            The optimizer's best curve afterwards
        """
        if not self.optimizer.is_ready:
            self.reset()
        for _ in range(n_steps):
            self.step()
        return self.best_curve

    def tick(self, elapsed_seconds: float) -> int:
        """
        Advance by wall-clock time at settings.steps_per_second.

        Fractional steps carry over to the next tick.

        Returns:
            Number of steps taken
        """
        if elapsed_seconds < 0:
            raise ValueError(f"elapsed_seconds must be non-negative, got {elapsed_seconds}")
        self._pending_time += elapsed_seconds
        n_steps = math.floor(self._pending_time * self.settings.steps_per_second)
        self._pending_time -= n_steps / self.settings.steps_per_second
        for _ in range(n_steps):
            self.step()
        return n_steps

    def update_points(self, points: Dataset) -> None:
        """Swap in a new dataset; cached losses are brought up to date."""
        self.points = [Point(*p) for p in points]
        self.optimizer.refresh_loss(self.points, self.settings.weight_penalty)

    def update_settings(self, settings: Settings) -> None:
        """
        Swap in new settings.

        A changed coefficient count regenerates the curves; anything else only
        refreshes cached losses.
        """
        reinitialize = settings.num_weights != self.settings.num_weights
        self.settings = settings
        if reinitialize and self.optimizer.is_ready:
            logger.info("num_weights changed to %d; regenerating curves", settings.num_weights)
            self.reset()
        else:
            self.optimizer.refresh_loss(self.points, settings.weight_penalty)

    def summary(self) -> str:
        info = get_algorithm_info(self.optimizer.ALGORITHM_ID)
        best = self.best_curve
        loss_text = scientific_notation(best.loss) if best is not None else "n/a"
        return f"{info.full_name}: {self.steps_taken} steps, best loss {loss_text}"
