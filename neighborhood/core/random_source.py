"""RandomSource — the single integer sampler shared by the simulation.

Wraps one NumPy ``Generator``.  Creating a generator is comparatively
expensive, so a source builds it exactly once and every draw reuses it.
Callers that are not handed an explicit source share the process-wide
instance returned by :func:`default_source`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Sequence

    from numpy.random import Generator

T = TypeVar("T")


class RandomSource:
    """Uniform integer sampling over inclusive ranges.

    Attributes:
        seed: The seed the generator was built from, or None when it was
            seeded from OS entropy.
    """

    def __init__(self, seed: int | None = None) -> None:
        """Build the underlying generator.

        Args:
            seed: Fixed seed for reproducible runs.  None draws fresh
                entropy from the operating system.
        """
        self.seed = seed
        self._generator: Generator = np.random.default_rng(seed)

    def uniform(self, low: int, high: int) -> int:
        """Return an unbiased integer in ``[low, high]``.

        Args:
            low: Smallest value that may be returned.
            high: Largest value that may be returned (``high >= low``).

        Raises:
            ValueError: If ``low > high``.
        """
        return int(self._generator.integers(low, high, endpoint=True))

    def choice(self, items: Sequence[T]) -> T:
        """Return one element of a non-empty sequence, uniformly."""
        return items[self.uniform(0, len(items) - 1)]


_default: RandomSource | None = None


def default_source() -> RandomSource:
    """Return the process-wide source, creating it on first use."""
    global _default
    if _default is None:
        _default = RandomSource()
    return _default
