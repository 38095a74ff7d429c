"""Algorithm metadata and optimizer factory."""

from typing import Dict, List, NamedTuple, Optional, Type

from .adam import AdamOptimizer
from .evolutionary import EvolutionaryOptimizer
from .gradient_descent import GradientDescentOptimizer
from .momentum import MomentumOptimizer
from .optimizer_base import Optimizer
from .particle_swarm import ParticleSwarmOptimizer
from .polynomial_solver import PolynomialSolver
from .random_search import RandomSearchOptimizer
from .simulated_annealing import SimulatedAnnealingOptimizer


class AlgorithmInfo(NamedTuple):
    id: str
    name: str
    full_name: str
    category: str
    color: str


ALGORITHMS: List[AlgorithmInfo] = [
    AlgorithmInfo("gradient", "Stochastic", "Stochastic Gradient Descent", "Gradient Descent", "#0891b2"),
    AlgorithmInfo("momentum", "Momentum", "Momentum-Based Gradient Descent", "Gradient Descent", "#6366f1"),
    AlgorithmInfo("adam", "Adam", "Adam Optimizer", "Gradient Descent", "#a855f7"),
    AlgorithmInfo("genetic", "Genetic", "Genetic Algorithm", "Evolutionary", "#65a30d"),
    AlgorithmInfo("particle-swarm", "Particle", "Particle Swarm Optimization", "Swarm Intelligence", "#059669"),
    AlgorithmInfo("random-search", "Random", "Random Search", "Baseline", "#d946ef"),
    AlgorithmInfo("simulated-annealing", "Annealing", "Simulated Annealing", "Metaheuristic", "#ca8a04"),
    AlgorithmInfo("polynomial-solver", "Solve", "Exact Polynomial Solver", "Baseline", "#ec4899"),
]

ALGORITHM_ORDER: List[str] = [
    "gradient",
    "momentum",
    "adam",
    "genetic",
    "particle-swarm",
    "simulated-annealing",
    "random-search",
    "polynomial-solver",
]

OPTIMIZER_CLASSES: Dict[str, Type[Optimizer]] = {
    cls.ALGORITHM_ID: cls
    for cls in (
        GradientDescentOptimizer,
        MomentumOptimizer,
        AdamOptimizer,
        EvolutionaryOptimizer,
        ParticleSwarmOptimizer,
        SimulatedAnnealingOptimizer,
        RandomSearchOptimizer,
        PolynomialSolver,
    )
}


def get_algorithm_info(algorithm_id: str) -> AlgorithmInfo:
    for info in ALGORITHMS:
        if info.id == algorithm_id:
            return info
    raise ValueError(f"Unknown solution method: {algorithm_id}")


def get_algorithm_color(algorithm_id: str) -> str:
    return get_algorithm_info(algorithm_id).color


def create_optimizer(algorithm_id: str, seed: Optional[int] = None) -> Optimizer:
    """Instantiate the optimizer registered under algorithm_id."""
    try:
        cls = OPTIMIZER_CLASSES[algorithm_id]
    except KeyError:
        raise ValueError(f"Unknown solution method: {algorithm_id}") from None
    return cls(seed=seed)
