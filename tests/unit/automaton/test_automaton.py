import random
import re

import pytest

from fsmcast.automaton import (
    ALPHABET,
    Automaton,
    DEFAULT_TRANSITIONS,
    State,
    Symbol,
    TransitionTable,
)
from fsmcast.errors import AutomatonDefinitionError, ProtocolViolationError


ACCEPTED_PREFIX = re.compile(r"[BC]*A[AC]*B[AB]*C")


class TestGuardedAdvance:
    """Test guarded transitions of the default automaton."""

    def test_initial_state(self, automaton: Automaton):
        assert automaton.initial == State.Q0
        assert automaton.accepting == frozenset({State.Q3})

    @pytest.mark.parametrize(
        "state,symbol,successor",
        [
            (State.Q0, Symbol.A, State.Q1),
            (State.Q0, Symbol.B, State.Q0),
            (State.Q0, Symbol.C, State.Q0),
            (State.Q1, Symbol.A, State.Q1),
            (State.Q1, Symbol.B, State.Q2),
            (State.Q1, Symbol.C, State.Q1),
            (State.Q2, Symbol.A, State.Q2),
            (State.Q2, Symbol.B, State.Q2),
            (State.Q2, Symbol.C, State.Q3),
            (State.Q3, Symbol.A, State.Q3),
            (State.Q3, Symbol.B, State.Q3),
            (State.Q3, Symbol.C, State.Q3),
        ],
    )
    def test_advance(self, automaton: Automaton, state, symbol, successor):
        assert automaton.advance(state, symbol) == successor

    def test_advance_accepts_integer_symbols(self, automaton: Automaton):
        assert automaton.advance(State.Q0, 0) == State.Q1

    def test_guard_absorbs_symbol_in_other_states(self):
        """A raw table entry is only taken in the state its guard names."""
        rows = list(DEFAULT_TRANSITIONS)
        rows[2] = (State.Q0, State.Q2, State.Q3)
        automaton = Automaton(TransitionTable(rows))

        assert automaton.next_state(State.Q2, Symbol.A) == State.Q0
        assert automaton.advance(State.Q2, Symbol.A) == State.Q2

    @pytest.mark.parametrize("symbol", [Symbol.ACK, Symbol.SHUTDOWN, 7])
    def test_symbol_outside_alphabet(self, automaton: Automaton, symbol):
        with pytest.raises(ProtocolViolationError):
            automaton.advance(State.Q0, symbol)


class TestTraces:
    """Test whole symbol sequences."""

    def test_trace(self, automaton: Automaton):
        symbols = [Symbol.B, Symbol.A, Symbol.C, Symbol.B, Symbol.A, Symbol.C]

        assert automaton.trace(symbols) == [
            State.Q0,
            State.Q1,
            State.Q1,
            State.Q2,
            State.Q2,
            State.Q3,
        ]
        assert automaton.accepts(symbols) is True

    def test_shortest_accepted_word(self, automaton: Automaton):
        assert automaton.accepts([Symbol.A, Symbol.B, Symbol.C]) is True
        assert automaton.accepts([Symbol.C, Symbol.B, Symbol.A]) is False
        assert automaton.accepts([]) is False

    def test_accepting_state_absorbs_everything(self, automaton: Automaton):
        states = automaton.trace([Symbol.A, Symbol.B, Symbol.C, Symbol.A, Symbol.B])

        assert states[-3:] == [State.Q3, State.Q3, State.Q3]

    def test_acceptance_matches_language(self, automaton: Automaton):
        """A word reaches Q3 exactly when some prefix is in the accepted language."""
        generator = random.Random(1337)

        for _ in range(500):
            symbols = [
                generator.choice(ALPHABET) for _ in range(generator.randint(0, 12))
            ]
            word = "".join(symbol.name for symbol in symbols)

            assert automaton.accepts(symbols) == (
                ACCEPTED_PREFIX.match(word) is not None
            ), word


class TestAutomatonValidation:
    """Test malformed automata are rejected."""

    def test_initial_outside_table(self):
        table = TransitionTable(
            [
                (State.Q1, State.Q0, State.Q0),
                (State.Q1, State.Q1, State.Q1),
            ],
            states=(State.Q0, State.Q1),
        )

        with pytest.raises(AutomatonDefinitionError):
            Automaton(table, initial=State.Q2, accepting=(State.Q1,))

    def test_no_accepting_states(self):
        with pytest.raises(AutomatonDefinitionError):
            Automaton(accepting=())

    def test_accepting_state_must_self_loop(self):
        with pytest.raises(AutomatonDefinitionError):
            Automaton(accepting=(State.Q1,))

    def test_guard_outside_alphabet(self):
        with pytest.raises(AutomatonDefinitionError):
            Automaton(guards={Symbol.ACK: State.Q0})
