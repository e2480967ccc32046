"""
Index permutations for variables and clauses.

Each index gets a real-valued key and the indices are stably sorted by key.
Full permutation draws keys uniformly from [0, n); windowed jitter adds
bounded noise to the index itself, so elements only move a few places.

The sorted order (original index at each rank) is handed to the rewriter,
which reads it as "new position of original index i". For jitter this is a
near-identity either way and for a uniform shuffle both readings are equally
uniform; the array is always a bijection on [0, n).
"""
from enum import Enum

import numpy as np

from scranfilize.core.errors import AllocationError


class PermutationMode(str, Enum):
    FULL_PERMUTE = "full_permute"
    WINDOWED_JITTER = "windowed_jitter"


def make_rng(seed: int) -> np.random.Generator:
    """A fresh generator; every draw sequence starts from its own instance."""
    return np.random.default_rng(seed)


def generate_permutation(n: int,
                         mode: PermutationMode,
                         window: float,
                         absolute: bool,
                         rng: np.random.Generator) -> np.ndarray:
    """
    Returns a permutation of range(n) as an int64 array.

    `window` is the jitter width, measured in positions if `absolute` is
    set and as a fraction of `n` otherwise. It is ignored for full
    permutation. Equal keys keep their original relative order.
    """
    if n == 0:
        return np.empty(0, dtype=np.int64)

    try:
        if mode == PermutationMode.FULL_PERMUTE:
            keys = rng.random(n) * n
        else:
            jitter = rng.random(n) * window
            if not absolute:
                jitter *= n
            keys = np.arange(n, dtype=np.float64) + jitter
        return np.argsort(keys, kind="stable").astype(np.int64)
    except MemoryError as e:
        raise AllocationError(f"out-of-memory allocating {n} ranks") from e


def is_permutation(arr: np.ndarray) -> bool:
    """True iff every value in [0, len(arr)) occurs exactly once."""
    n = len(arr)
    if n == 0:
        return True
    arr = np.asarray(arr)
    if arr.min() < 0 or arr.max() >= n:
        return False
    return bool(np.all(np.bincount(arr, minlength=n) == 1))
