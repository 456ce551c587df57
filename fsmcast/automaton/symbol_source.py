from __future__ import annotations

import itertools
import random
from typing import Iterable, Iterator, Protocol, Sequence

from .symbol import ALPHABET, Symbol


class SymbolSource(Protocol):
    def __iter__(self) -> Iterator[Symbol]: ...


class RandomSymbolSource:
    """Uniform draws over the alphabet, endless unless ``limit`` is set."""

    def __init__(
        self,
        alphabet: Sequence[Symbol] = ALPHABET,
        seed: int | None = None,
        limit: int | None = None,
    ) -> None:
        self.alphabet = tuple(alphabet)
        self.seed = seed
        self.limit = limit
        self._random = random.Random(seed)

    def __iter__(self) -> Iterator[Symbol]:
        draws = itertools.count() if self.limit is None else range(self.limit)
        for _ in draws:
            yield self._random.choice(self.alphabet)


class SequenceSymbolSource:
    def __init__(
        self,
        symbols: Iterable[Symbol | int],
        repeat: bool = False,
    ) -> None:
        self.symbols = tuple(Symbol(symbol) for symbol in symbols)
        self.repeat = repeat

    def __iter__(self) -> Iterator[Symbol]:
        if self.repeat and len(self.symbols) > 0:
            return itertools.cycle(self.symbols)

        return iter(self.symbols)
