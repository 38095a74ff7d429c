"""
Shared optimizer interface.

Every algorithm owns one curve or a population of curves and moves through
two states: UNINITIALIZED until the first initialize() call, READY after it.
step() and refresh_loss() are silent no-ops while uninitialized so that a
driver loop can call them before the first initialize() has happened.
"""

import enum
import numpy as np
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

from .config import Settings, require_positive_count
from .curve_model import Curve, Dataset, compute_loss
from .logging_config import get_logger
from .sampling import generate_random_weights, make_rng

logger = get_logger(__name__)


class OptimizerState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"


class Optimizer(ABC):
    """Base class for curve optimizers with initialize/step/refresh_loss."""

    ALGORITHM_ID: str = ""
    SINGLE_CURVE: bool = True

    def __init__(self, seed: Optional[int] = None):
        self.rng = make_rng(seed)
        self.state = OptimizerState.UNINITIALIZED
        self._curves: List[Curve] = []
        self._next_curve_id = 1

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def is_ready(self) -> bool:
        return self.state is OptimizerState.READY

    @property
    def curve(self) -> Optional[Curve]:
        """The current curve of a single-curve optimizer, first member otherwise."""
        return self._curves[0] if self._curves else None

    @property
    def curves(self) -> Tuple[Curve, ...]:
        return tuple(self._curves)

    @property
    def best_curve(self) -> Optional[Curve]:
        """Lowest-loss curve, first in population order on ties."""
        if not self._curves:
            return None
        return self._curves[best_index(self._curves)]

    # ------------------------------------------------------------------
    # Curve bookkeeping
    # ------------------------------------------------------------------

    def _new_curve(self, weights: np.ndarray, points: Dataset, weight_penalty: float) -> Curve:
        """Create a curve with the next id and its loss already computed."""
        curve = Curve(self._next_curve_id, weights)
        self._next_curve_id += 1
        curve.loss = compute_loss(curve.weights, points, weight_penalty)
        return curve

    def _random_weights(self, num_weights: int) -> np.ndarray:
        return generate_random_weights(num_weights, self.rng)

    def load_weights(
        self, weight_vectors: Sequence[np.ndarray], points: Dataset, weight_penalty: float
    ) -> None:
        """
        Replace every owned curve with curves built from the given coefficients.

        Auxiliary per-weight state is reset and the optimizer becomes READY.

        Args:
            weight_vectors: One coefficient vector per curve
            points: Dataset used for the initial losses
            weight_penalty: L2 coefficient
        """
        vectors = [np.array(w, dtype=np.float64).reshape(-1) for w in weight_vectors]
        if not vectors:
            raise ValueError("at least one weight vector is required")
        if self.SINGLE_CURVE and len(vectors) != 1:
            raise ValueError(
                f"{type(self).__name__} owns exactly one curve, got {len(vectors)} weight vectors"
            )
        require_positive_count("num_weights", vectors[0].shape[0])
        if any(w.shape != vectors[0].shape for w in vectors):
            raise ValueError("all weight vectors must have the same length")
        self._curves = [self._new_curve(w, points, weight_penalty) for w in vectors]
        self._reset_auxiliary()
        self._mark_ready()

    def _reset_auxiliary(self) -> None:
        """Hook for subclasses that keep per-weight state alongside the curves."""
        pass

    def _mark_ready(self) -> None:
        self.state = OptimizerState.READY
        logger.info(
            "%s initialized with %d curve(s)", type(self).__name__, len(self._curves)
        )

    def _skip_if_uninitialized(self, operation: str) -> bool:
        if self.is_ready:
            return False
        logger.debug("%s.%s called before initialize; ignoring", type(self).__name__, operation)
        return True

    # ------------------------------------------------------------------
    # Contract
    # ------------------------------------------------------------------

    def refresh_loss(self, points: Dataset, weight_penalty: float) -> None:
        """Recompute every owned curve's loss without touching weights."""
        if self._skip_if_uninitialized("refresh_loss"):
            return
        for curve in self._curves:
            curve.loss = compute_loss(curve.weights, points, weight_penalty)

    @abstractmethod
    def setup(self, settings: Settings, points: Dataset) -> None:
        """Call initialize() with this algorithm's slice of settings."""
        pass

    @abstractmethod
    def advance(self, settings: Settings, points: Dataset) -> None:
        """Call step() with this algorithm's slice of settings."""
        pass


def best_index(curves: List[Curve]) -> int:
    """Index of the minimum-loss curve; the first one wins on ties."""
    losses = np.array([c.loss for c in curves], dtype=np.float64)
    # np.argmin returns the first occurrence; NaN losses never win
    losses = np.where(np.isnan(losses), np.inf, losses)
    return int(np.argmin(losses))
