from __future__ import annotations

from enum import IntEnum


class Symbol(IntEnum):
    A = 0
    B = 1
    C = 2
    # Reserved tags, disjoint from the data alphabet.
    ACK = 3
    SHUTDOWN = 4

    @classmethod
    def from_value(cls, value: int) -> Symbol | None:
        try:
            return cls(value)

        except ValueError:
            return None

    @property
    def is_data(self) -> bool:
        return self in ALPHABET


ALPHABET: tuple[Symbol, ...] = (
    Symbol.A,
    Symbol.B,
    Symbol.C,
)

NUM_SYMBOLS = len(ALPHABET)
