"""Stateful RNG interface over the immutable Generator."""
from abc import ABC, abstractmethod

from purerand.logic.generator import Generator


class RNGBase(ABC):
    """Abstract RNG interface."""

    @abstractmethod
    def random(self) -> float:
        """Return random float in [0, 1)."""
        pass

    @abstractmethod
    def randint(self, a: int, b: int) -> int:
        """Return random int in [a, b] inclusive."""
        pass


class GeneratorRNG(RNGBase):
    """
    Classic stateful RNG that threads a Generator internally.

    Deterministic, fully controlled by seed. Single-owner: the held
    generator is replaced on every call, so instances must not be shared
    between threads. Snapshot with `generator` and resume with
    `GeneratorRNG.from_generator`.
    """

    def __init__(self, seed: int):
        self._generator = Generator.new(seed)
        self.seed = seed

    @classmethod
    def from_generator(cls, generator: Generator) -> "GeneratorRNG":
        return cls(generator.current_seed)

    @property
    def generator(self) -> Generator:
        """Current immutable state."""
        return self._generator

    def random(self) -> float:
        self._generator, value = self._generator.next_f64()
        return value

    def randint(self, a: int, b: int) -> int:
        self._generator, value = self._generator.next_ranged_i64(a, b)
        return value

