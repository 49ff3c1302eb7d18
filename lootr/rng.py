import random
from typing import Optional, Protocol, Union, runtime_checkable

Seed = Union[int, str, bytes]


@runtime_checkable
class RandomSource(Protocol):
    """Anything the drop engine can draw from."""

    def random(self) -> float:
        """Uniform float in [0, 1)."""
        ...

    def randint(self, a: int, b: int) -> int:
        """Uniform int in [a, b], both ends included."""
        ...


class SeededRandom:
    """
    Reproducible random stream.

    Two instances built with the same seed return the same values for the
    same sequence of calls, in this process or any other.
    """

    def __init__(self, seed: Seed):
        self.seed = seed
        self._rng = random.Random(seed)

    def random(self) -> float:
        return self._rng.random()

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)

    def __repr__(self) -> str:
        return f"SeededRandom(seed={self.seed!r})"


class EntropyRandom:
    """Non deterministic stream backed by the OS entropy pool."""

    def __init__(self):
        self._rng = random.SystemRandom()

    def random(self) -> float:
        return self._rng.random()

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)

    def __repr__(self) -> str:
        return "EntropyRandom()"


def get_rng(seed: Optional[Seed] = None) -> RandomSource:
    """Same seed always produces the same drop order."""
    if seed is None:
        return EntropyRandom()
    return SeededRandom(seed)
