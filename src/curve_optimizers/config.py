"""
Hyperparameter settings with defaults and UI ranges.

All values are plain numbers. Only structural values (counts) are validated;
numeric hyperparameters such as a negative learning rate are legal and give
well-defined, if degenerate, behavior.
"""

import numbers
from dataclasses import dataclass, field
from typing import Dict, NamedTuple


class Range(NamedTuple):
    """Slider range for a numeric setting."""

    min: float
    max: float
    default: float


RANGES: Dict[str, Range] = {
    "num_points": Range(1, 24, 5),
    "num_weights": Range(1, 24, 5),
    "population_size": Range(2, 64, 5),
    "steps_per_second": Range(1, 256, 60),
    "mutation_variance": Range(0.01, 2.0, 1.0),
    "weight_penalty": Range(0.0, 1.0, 0.0),
    "learning_rate": Range(0.0001, 1.0, 0.1),
    "stochasticity": Range(0.0, 3.0, 0.0),
    "adam_learning_rate": Range(0.0001, 1.0, 0.1),
    "adam_beta1": Range(0.0, 0.999, 0.97),
    "adam_beta2": Range(0.0, 0.9999, 0.999),
    "adam_epsilon": Range(1e-10, 1e-6, 1e-8),
    "sa_initial_temperature": Range(0.1, 10.0, 1.0),
    "sa_cooling_rate": Range(0.9, 0.9999, 0.995),
    "sa_iterations": Range(1, 100, 10),
    "ps_particles": Range(2, 64, 20),
    "ps_inertia": Range(0.0, 1.0, 0.7),
    "ps_cognitive": Range(0.0, 4.0, 1.5),
    "ps_social": Range(0.0, 4.0, 1.5),
    "momentum_learning_rate": Range(0.0001, 1.0, 0.1),
    "momentum_beta": Range(0.0, 0.999, 0.9),
    "rs_curves": Range(2, 64, 10),
}


def clamp_to_range(name: str, value: float) -> float:
    """Clamp a value into the slider range registered under name."""
    r = RANGES[name]
    return min(max(value, r.min), r.max)


def require_positive_count(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 1:
        raise ValueError(f"{name} must be a positive integer, got {value}")


@dataclass(frozen=True)
class GradientDescentConfig:
    learning_rate: float = RANGES["learning_rate"].default
    stochasticity: float = RANGES["stochasticity"].default


@dataclass(frozen=True)
class MomentumConfig:
    learning_rate: float = RANGES["momentum_learning_rate"].default
    beta: float = RANGES["momentum_beta"].default


@dataclass(frozen=True)
class AdamConfig:
    learning_rate: float = RANGES["adam_learning_rate"].default
    beta1: float = RANGES["adam_beta1"].default
    beta2: float = RANGES["adam_beta2"].default
    epsilon: float = RANGES["adam_epsilon"].default


@dataclass(frozen=True)
class EvolutionaryConfig:
    population_size: int = int(RANGES["population_size"].default)
    mutation_variance: float = RANGES["mutation_variance"].default

    def __post_init__(self):
        require_positive_count("population_size", self.population_size)


@dataclass(frozen=True)
class ParticleSwarmConfig:
    num_particles: int = int(RANGES["ps_particles"].default)
    inertia: float = RANGES["ps_inertia"].default
    cognitive: float = RANGES["ps_cognitive"].default
    social: float = RANGES["ps_social"].default

    def __post_init__(self):
        require_positive_count("num_particles", self.num_particles)


@dataclass(frozen=True)
class SimulatedAnnealingConfig:
    initial_temperature: float = RANGES["sa_initial_temperature"].default
    cooling_rate: float = RANGES["sa_cooling_rate"].default
    iterations: int = int(RANGES["sa_iterations"].default)

    def __post_init__(self):
        require_positive_count("iterations", self.iterations)


@dataclass(frozen=True)
class RandomSearchConfig:
    num_curves: int = int(RANGES["rs_curves"].default)

    def __post_init__(self):
        require_positive_count("num_curves", self.num_curves)


@dataclass(frozen=True)
class Settings:
    """Everything a driver passes to an optimizer, one sub-config per algorithm."""

    num_weights: int = int(RANGES["num_weights"].default)
    weight_penalty: float = RANGES["weight_penalty"].default
    steps_per_second: float = RANGES["steps_per_second"].default
    gradient: GradientDescentConfig = field(default_factory=GradientDescentConfig)
    momentum: MomentumConfig = field(default_factory=MomentumConfig)
    adam: AdamConfig = field(default_factory=AdamConfig)
    genetic: EvolutionaryConfig = field(default_factory=EvolutionaryConfig)
    particle_swarm: ParticleSwarmConfig = field(default_factory=ParticleSwarmConfig)
    simulated_annealing: SimulatedAnnealingConfig = field(
        default_factory=SimulatedAnnealingConfig
    )
    random_search: RandomSearchConfig = field(default_factory=RandomSearchConfig)

    def __post_init__(self):
        require_positive_count("num_weights", self.num_weights)
        if self.steps_per_second <= 0:
            raise ValueError(
                f"steps_per_second must be positive, got {self.steps_per_second}"
            )
