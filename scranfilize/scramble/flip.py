import numpy as np

from scranfilize.core.errors import AllocationError


def flip_vector(max_var: int, probability: float, rng: np.random.Generator) -> np.ndarray:
    """
    Decides per variable whether its literals change polarity.

    Probabilities at or beyond the bounds make no draws at all. Otherwise
    one uniform draw per variable, in index order, flips iff it is <= p.
    """
    try:
        if probability <= 0.0:
            return np.zeros(max_var, dtype=bool)
        if probability >= 1.0:
            return np.ones(max_var, dtype=bool)
        return rng.random(max_var) <= probability
    except MemoryError as e:
        raise AllocationError(f"out-of-memory allocating {max_var} flip decisions") from e
