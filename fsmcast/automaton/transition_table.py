from __future__ import annotations

from typing import Sequence

from fsmcast.errors import AutomatonDefinitionError

from .state import State
from .symbol import ALPHABET, Symbol


DEFAULT_TRANSITIONS: tuple[tuple[State, ...], ...] = (
    #  A         B         C
    (State.Q1, State.Q0, State.Q0),  # Q0
    (State.Q1, State.Q2, State.Q1),  # Q1
    (State.Q2, State.Q2, State.Q3),  # Q2
    (State.Q3, State.Q3, State.Q3),  # Q3
)


class TransitionTable:
    """
    Dense, total transition function ``State x Symbol -> State``.

    Rows are indexed by state value and columns by symbol value. The
    table is validated on construction so that every (state, symbol)
    pair over the given states and alphabet maps to exactly one known
    successor state.
    """

    __slots__ = (
        "_rows",
        "_state_index",
        "_symbol_index",
        "states",
        "alphabet",
    )

    def __init__(
        self,
        rows: Sequence[Sequence[State | int]] = DEFAULT_TRANSITIONS,
        states: Sequence[State] = tuple(State),
        alphabet: Sequence[Symbol] = ALPHABET,
    ) -> None:
        self.states = tuple(states)
        self.alphabet = tuple(alphabet)
        self._state_index = {state: idx for idx, state in enumerate(self.states)}
        self._symbol_index = {symbol: idx for idx, symbol in enumerate(self.alphabet)}
        self._rows = self._validate(rows)

    def _validate(
        self,
        rows: Sequence[Sequence[State | int]],
    ) -> tuple[tuple[State, ...], ...]:
        if len(rows) != len(self.states):
            raise AutomatonDefinitionError(
                f"Err. - transition table has {len(rows)} rows for {len(self.states)} states"
            )

        for symbol in self.alphabet:
            if not symbol.is_data:
                raise AutomatonDefinitionError(
                    f"Err. - reserved symbol {symbol.name} cannot be part of the alphabet"
                )

        validated: list[tuple[State, ...]] = []
        for state, row in zip(self.states, rows):
            if len(row) != len(self.alphabet):
                raise AutomatonDefinitionError(
                    f"Err. - row for {state.name} has {len(row)} entries for {len(self.alphabet)} symbols"
                )

            try:
                successors = tuple(State(successor) for successor in row)

            except ValueError as err:
                raise AutomatonDefinitionError(
                    f"Err. - row for {state.name} contains an unknown state"
                ) from err

            for successor in successors:
                if successor not in self.states:
                    raise AutomatonDefinitionError(
                        f"Err. - row for {state.name} transitions to {successor.name}, which is not in the state set"
                    )

            validated.append(successors)

        return tuple(validated)

    def next_state(self, state: State, symbol: Symbol) -> State:
        return self._rows[self._state_index[state]][self._symbol_index[symbol]]

    def row(self, state: State) -> tuple[State, ...]:
        return self._rows[self._state_index[state]]

    def __iter__(self):
        for state, row in zip(self.states, self._rows):
            for symbol, successor in zip(self.alphabet, row):
                yield state, symbol, successor
