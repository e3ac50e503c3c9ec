# =============================================================================
# core/random_source.py - Injectable source of randomness
# =============================================================================

import random
from abc import ABC, abstractmethod
from typing import Optional, Sequence, TypeVar

T = TypeVar('T')


class RandomSource(ABC):
    """Uniform draws used by the attribute synthesizer"""

    @abstractmethod
    def randint(self, low: int, high: int) -> int:
        """Return an integer in [low, high], both ends inclusive"""
        pass

    @abstractmethod
    def choice(self, items: Sequence[T]) -> T:
        """Return one element of a non-empty sequence"""
        pass


class SystemRandomSource(RandomSource):
    """RandomSource backed by the OS entropy pool"""

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.SystemRandom()

    def randint(self, low: int, high: int) -> int:
        return self._rng.randint(low, high)

    def choice(self, items: Sequence[T]) -> T:
        return self._rng.choice(items)
