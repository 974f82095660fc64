"""Seedable RNG wrapper for reproducible map generation and AI choices."""

import random
from typing import Sequence, TypeVar

T = TypeVar("T")


class GameRNG:
    """Thin wrapper around random.Random.

    The turn engine itself never draws random numbers; only setup and AI
    strategies do, and they must go through this class so that a seed
    reproduces a whole game.
    """

    def __init__(self, seed: int):
        """Initialize RNG with given seed.

        Args:
            seed: Integer seed for deterministic randomness
        """
        self.seed = seed
        self.rng = random.Random(seed)

    def randint(self, a: int, b: int) -> int:
        """Return random integer in range [a, b], inclusive."""
        return self.rng.randint(a, b)

    def choice(self, seq: Sequence[T]) -> T:
        """Choose random element from non-empty sequence."""
        return self.rng.choice(seq)

    def sample(self, seq: Sequence[T], k: int) -> list[T]:
        """Choose k distinct elements from a sequence.

        Args:
            seq: Population to draw from
            k: Number of elements (must not exceed len(seq))

        Returns:
            New list with k elements in selection order
        """
        return self.rng.sample(list(seq), k)

    def shuffle(self, seq: list) -> None:
        """Shuffle list in place."""
        self.rng.shuffle(seq)
