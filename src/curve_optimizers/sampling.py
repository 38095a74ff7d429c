"""
Random sampling helpers shared by every optimizer.

Normal variates come from the Box-Muller transform applied to two independent
uniform draws: z = sqrt(-2 ln u1) * cos(2 pi u2). The first uniform is drawn
from (0, 1] so that ln(u1) is always finite.
"""

import numpy as np
from typing import Optional, Tuple, Union

Shape = Union[int, Tuple[int, ...]]


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create a NumPy random generator, reproducible when seed is given."""
    return np.random.default_rng(seed)


def uniform_open_zero(rng: np.random.Generator, size: Optional[Shape] = None) -> np.ndarray:
    """
    Draw uniforms from (0, 1].

    Generator.random() samples [0, 1), so 1 - u lies in (0, 1] and can
    never be exactly zero.
    """
    return 1.0 - rng.random(size)


def box_muller(rng: np.random.Generator, size: Shape = 1) -> np.ndarray:
    """
    Draw standard-normal variates with the Box-Muller transform.

    Args:
        rng: Source of uniform randomness
        size: Output shape

    Returns:
        Array of samples with mean 0 and standard deviation 1
    """
    u1 = uniform_open_zero(rng, size)
    u2 = rng.random(size)
    return np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * np.pi * u2)


def random_normal(
    rng: np.random.Generator,
    mean: Union[float, np.ndarray] = 0.0,
    std_dev: Union[float, np.ndarray] = 1.0,
    size: Optional[Shape] = None,
) -> np.ndarray:
    """
    Draw Gaussian samples with the given mean and standard deviation.

    mean and std_dev broadcast against each other; size defaults to their
    broadcast shape. A standard deviation of zero returns the mean exactly.
    """
    if size is None:
        size = np.broadcast(np.asarray(mean), np.asarray(std_dev)).shape or 1
    return box_muller(rng, size) * std_dev + mean


def generate_random_weights(num_weights: int, rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """
    Build a weight vector whose entries are independent standard normals.

    Args:
        num_weights: Number of polynomial coefficients
        rng: Random generator; a fresh unseeded one is used when omitted

    Returns:
        Array of shape (num_weights,)
    """
    if num_weights < 0:
        raise ValueError(f"num_weights must be non-negative, got {num_weights}")
    if rng is None:
        rng = make_rng()
    return box_muller(rng, num_weights)
