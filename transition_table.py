"""
Transition tables for binary Turing machines.

A table holds one transition for every (state, read symbol) pair of an
N-state machine:
    (next_state, write_symbol, shift)

Where:
    - next_state: a state in [0, N), or N for the halting state
    - write_symbol: Symbol.ZERO or Symbol.ONE
    - shift: Shift.LEFT or Shift.RIGHT

Entries that were never set hold the UNDEFINED sentinel.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, List, Optional, Tuple


class InvalidArgument(ValueError):
    """Raised for arguments outside the domain of a table or codec operation."""


class Symbol(IntEnum):
    ZERO = 0
    ONE = 1


class Shift(IntEnum):
    LEFT = 0
    RIGHT = 1


@dataclass(frozen=True)
class Transition:
    """A single rule: where to go, what to write, which way to move."""
    next_state: int
    write_symbol: Symbol
    shift: Shift


# No rule for this (state, symbol) pair
UNDEFINED = None


class TransitionTable:
    """
    Fixed-shape N x 2 table of transitions.

    The shape is set at construction and never changes. The table does not
    check next_state ranges; the codec and the engine do.
    """

    def __init__(self, n_states: int):
        if n_states <= 0:
            raise InvalidArgument(f"n_states must be positive, got {n_states}")
        self.n_states = n_states
        self._rows: List[List[Optional[Transition]]] = [
            [UNDEFINED, UNDEFINED] for _ in range(n_states)
        ]

    @property
    def halt_state(self) -> int:
        return self.n_states

    def set(self, state, symbol, next_state, write_symbol, shift):
        """
        Overwrite the entry for (state, symbol).

        Args:
            state: Row index in [0, n_states)
            symbol: Read symbol (0/1 or Symbol)
            next_state: Target state; n_states means halt
            write_symbol: Symbol to write (0/1 or Symbol)
            shift: Shift direction (0/1 or Shift)
        """
        self._check_index(state, symbol)
        self._rows[state][symbol] = Transition(
            next_state=int(next_state),
            write_symbol=Symbol(write_symbol),
            shift=Shift(shift),
        )

    def get(self, state, symbol) -> Optional[Transition]:
        """Return the entry for (state, symbol), or UNDEFINED."""
        self._check_index(state, symbol)
        return self._rows[state][symbol]

    def _check_index(self, state, symbol):
        # negative indexes would wrap around to the last row
        if not 0 <= state < self.n_states:
            raise IndexError(f"state must be in [0, {self.n_states}), got {state}")
        if symbol not in (0, 1):
            raise IndexError(f"symbol must be 0 or 1, got {symbol}")

    def __iter__(self) -> Iterator[Tuple[int, Symbol, Optional[Transition]]]:
        # state-major, symbol-minor
        for state, row in enumerate(self._rows):
            for symbol in Symbol:
                yield state, symbol, row[symbol]

    def is_complete(self) -> bool:
        """True when every (state, symbol) pair has a rule."""
        return all(t is not UNDEFINED for _, _, t in self)

    def copy(self) -> 'TransitionTable':
        other = TransitionTable(self.n_states)
        other._rows = [list(row) for row in self._rows]
        return other

    def __eq__(self, other):
        if not isinstance(other, TransitionTable):
            return NotImplemented
        return self.n_states == other.n_states and self._rows == other._rows

    def __repr__(self):
        return f"TransitionTable(n_states={self.n_states}, rows={self._rows!r})"
