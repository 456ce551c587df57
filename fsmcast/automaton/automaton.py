from __future__ import annotations

from typing import Dict, Iterable, List

from fsmcast.errors import AutomatonDefinitionError, ProtocolViolationError

from .state import State
from .symbol import Symbol
from .transition_table import TransitionTable


DEFAULT_GUARDS: Dict[Symbol, State] = {
    Symbol.A: State.Q0,
    Symbol.B: State.Q1,
    Symbol.C: State.Q2,
}


class Automaton:
    """
    Deterministic automaton shared verbatim by every worker.

    ``advance`` is a guarded transition: a symbol only drives the
    transition table while the automaton sits in the state its guard
    names. In any other state the symbol is absorbed and the state is
    unchanged. With the default table and guards the accepted language
    is ``(B|C)* A (A|C)* B (A|B)* C``.

    The automaton holds no mutable state, so one instance can be shared
    read-only between any number of workers.
    """

    __slots__ = (
        "table",
        "initial",
        "accepting",
        "guards",
    )

    def __init__(
        self,
        table: TransitionTable | None = None,
        initial: State = State.Q0,
        accepting: Iterable[State] = (State.Q3,),
        guards: Dict[Symbol, State] | None = None,
    ) -> None:
        if table is None:
            table = TransitionTable()

        if guards is None:
            guards = dict(DEFAULT_GUARDS)

        self.table = table
        self.initial = initial
        self.accepting = frozenset(accepting)
        self.guards = guards

        if initial not in table.states:
            raise AutomatonDefinitionError(
                f"Err. - initial state {initial.name} is not in the state set"
            )

        if len(self.accepting) < 1:
            raise AutomatonDefinitionError(
                "Err. - automaton requires at least one accepting state"
            )

        for state in self.accepting:
            if state not in table.states:
                raise AutomatonDefinitionError(
                    f"Err. - accepting state {state.name} is not in the state set"
                )

            for successor in table.row(state):
                if successor != state:
                    raise AutomatonDefinitionError(
                        f"Err. - accepting state {state.name} must self-loop on every symbol"
                    )

        for symbol, state in guards.items():
            if symbol not in table.alphabet or state not in table.states:
                raise AutomatonDefinitionError(
                    f"Err. - guard {symbol.name} -> {state.name} is outside the table"
                )

    @classmethod
    def create_default(cls) -> Automaton:
        return cls()

    def next_state(self, state: State, symbol: Symbol) -> State:
        return self.table.next_state(state, symbol)

    def advance(self, state: State, symbol: Symbol | int) -> State:
        symbol = self._to_symbol(symbol)

        if self.guards.get(symbol) == state:
            return self.table.next_state(state, symbol)

        return state

    def is_accepting(self, state: State) -> bool:
        return state in self.accepting

    def trace(self, symbols: Iterable[Symbol | int]) -> List[State]:
        states: List[State] = []
        state = self.initial

        for symbol in symbols:
            state = self.advance(state, symbol)
            states.append(state)

        return states

    def accepts(self, symbols: Iterable[Symbol | int]) -> bool:
        state = self.initial

        for symbol in symbols:
            state = self.advance(state, symbol)
            if self.is_accepting(state):
                return True

        return self.is_accepting(state)

    def _to_symbol(self, symbol: Symbol | int) -> Symbol:
        resolved = Symbol.from_value(symbol)
        if resolved is None or resolved not in self.table.alphabet:
            raise ProtocolViolationError(
                f"Err. - symbol {symbol} is not part of the alphabet"
            )

        return resolved
