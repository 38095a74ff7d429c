"""
Particle swarm optimization over polynomial coefficients.

Each particle is a curve with a velocity and a memory of its own best
position. Per step:

    vel <- inertia * vel + cognitive * r1 * (pbest - x) + social * r2 * (gbest - x)
    x   <- x + vel

with r1, r2 drawn uniformly from [0, 1) for every coefficient.
"""

import numpy as np
from dataclasses import dataclass
from typing import List, Optional

from .config import Settings, require_positive_count
from .curve_model import Curve, Dataset, compute_loss
from .logging_config import get_logger
from .optimizer_base import Optimizer

logger = get_logger(__name__)

INITIAL_VELOCITY_SCALE = 0.1


@dataclass
class Particle:
    curve: Curve
    velocity: np.ndarray
    best_weights: np.ndarray
    best_loss: float


class ParticleSwarmOptimizer(Optimizer):
    """Global-best particle swarm."""

    ALGORITHM_ID = "particle-swarm"
    SINGLE_CURVE = False

    def __init__(self, seed: Optional[int] = None):
        super().__init__(seed)
        self.particles: List[Particle] = []
        self.global_best_weights: Optional[np.ndarray] = None
        self.global_best_loss: float = float("inf")

    def _update_global_best(self) -> None:
        best = min(self.particles, key=lambda p: p.best_loss)
        self.global_best_weights = best.best_weights.copy()
        self.global_best_loss = best.best_loss

    def initialize(
        self,
        num_particles: int,
        num_weights: int,
        points: Dataset,
        weight_penalty: float,
    ) -> None:
        """Scatter particles at random positions with small random velocities."""
        require_positive_count("num_particles", num_particles)
        require_positive_count("num_weights", num_weights)
        self.load_weights(
            [self._random_weights(num_weights) for _ in range(num_particles)],
            points,
            weight_penalty,
        )

    def _reset_auxiliary(self) -> None:
        self.particles = [
            Particle(
                curve,
                INITIAL_VELOCITY_SCALE * self._random_weights(curve.num_weights),
                curve.weights.copy(),
                curve.loss,
            )
            for curve in self._curves
        ]
        self._update_global_best()

    def step(
        self,
        inertia: float,
        cognitive: float,
        social: float,
        points: Dataset,
        weight_penalty: float,
    ) -> None:
        if self._skip_if_uninitialized("step") or not self.particles:
            return
        self.refresh_loss(points, weight_penalty)
        for particle in self.particles:
            x = particle.curve.weights
            r1 = self.rng.random(x.shape)
            r2 = self.rng.random(x.shape)
            particle.velocity = (
                inertia * particle.velocity
                + cognitive * r1 * (particle.best_weights - x)
                + social * r2 * (self.global_best_weights - x)
            )
            particle.curve.weights = x + particle.velocity
            particle.curve.loss = compute_loss(particle.curve.weights, points, weight_penalty)
            if particle.curve.loss < particle.best_loss:
                particle.best_weights = particle.curve.weights.copy()
                particle.best_loss = particle.curve.loss
        self._update_global_best()
        logger.debug("swarm step: global best loss=%.6g", self.global_best_loss)

    def refresh_loss(self, points: Dataset, weight_penalty: float) -> None:
        """Recompute current and remembered losses against the new dataset."""
        if self._skip_if_uninitialized("refresh_loss"):
            return
        super().refresh_loss(points, weight_penalty)
        for particle in self.particles:
            particle.best_loss = compute_loss(particle.best_weights, points, weight_penalty)
        self._update_global_best()

    def setup(self, settings: Settings, points: Dataset) -> None:
        self.initialize(
            settings.particle_swarm.num_particles,
            settings.num_weights,
            points,
            settings.weight_penalty,
        )

    def advance(self, settings: Settings, points: Dataset) -> None:
        cfg = settings.particle_swarm
        self.step(cfg.inertia, cfg.cognitive, cfg.social, points, settings.weight_penalty)
