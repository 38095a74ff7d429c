"""
curve_optimizers -- step-by-step optimizers that fit a polynomial to 2D points.

Gradient descent, momentum, Adam, mutation hill-climbing, particle swarm,
simulated annealing, random search and an exact solver, all sharing one
initialize / step / refresh_loss interface over the same curve and loss model.
"""

from .adam import AdamOptimizer, AdamState
from .config import Settings
from .curve_model import Curve, EmptyDatasetError, Point, evaluate, loss
from .driver import OptimizerDriver
from .evolutionary import EvolutionaryOptimizer
from .gradient_descent import GradientDescentOptimizer
from .momentum import MomentumOptimizer
from .optimizer_base import Optimizer, OptimizerState
from .particle_swarm import ParticleSwarmOptimizer
from .polynomial_solver import PolynomialSolver
from .random_search import RandomSearchOptimizer
from .registry import ALGORITHM_ORDER, ALGORITHMS, create_optimizer, get_algorithm_info
from .sampling import generate_random_weights
from .simulated_annealing import SimulatedAnnealingOptimizer

__version__ = "0.1.0"

__all__ = [
    "ALGORITHMS",
    "ALGORITHM_ORDER",
    "AdamOptimizer",
    "AdamState",
    "Curve",
    "EmptyDatasetError",
    "EvolutionaryOptimizer",
    "GradientDescentOptimizer",
    "MomentumOptimizer",
    "Optimizer",
    "OptimizerDriver",
    "OptimizerState",
    "ParticleSwarmOptimizer",
    "Point",
    "PolynomialSolver",
    "RandomSearchOptimizer",
    "Settings",
    "SimulatedAnnealingOptimizer",
    "create_optimizer",
    "evaluate",
    "generate_random_weights",
    "get_algorithm_info",
    "loss",
]
