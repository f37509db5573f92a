"""Injectable randomness for spawning and target placement."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

import numpy as np

from ouroboros.errors import EmptyOptionsError, InvalidRangeError

T = TypeVar("T")


class RandomSource:
    """Uniform integer and choice sampling over a NumPy generator.

    Pass a *seed* (or a ready ``np.random.Generator``) for deterministic,
    reproducible games; omit both for fresh entropy.
    """

    def __init__(
        self,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def int_in_range(self, low: int, high: int) -> int:
        """Return an integer uniformly drawn from ``[low, high)``."""
        if high <= low:
            raise InvalidRangeError(
                f"Empty range [{low}, {high}): high must be greater than low."
            )
        return int(self.rng.integers(low, high))

    def choice(self, options: Sequence[T]) -> T:
        """Return a uniformly selected element of *options*."""
        if len(options) == 0:
            raise EmptyOptionsError("Cannot choose from an empty sequence.")
        return options[self.int_in_range(0, len(options))]
