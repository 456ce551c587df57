from .automaton import Automaton as Automaton
from .automaton import DEFAULT_GUARDS as DEFAULT_GUARDS
from .state import State as State
from .symbol import ALPHABET as ALPHABET
from .symbol import NUM_SYMBOLS as NUM_SYMBOLS
from .symbol import Symbol as Symbol
from .symbol_source import RandomSymbolSource as RandomSymbolSource
from .symbol_source import SequenceSymbolSource as SequenceSymbolSource
from .symbol_source import SymbolSource as SymbolSource
from .transition_table import DEFAULT_TRANSITIONS as DEFAULT_TRANSITIONS
from .transition_table import TransitionTable as TransitionTable
