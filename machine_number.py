"""
Machine numbers: a bijection between N-state transition tables and integers.

Every transition is drawn from (N+1) next states x 2 write symbols x 2 shifts,
so the tables of N states are enumerated by the integers in
[0, (4(N+1))^(2N)).

The integer is read as a mixed-radix number. Starting from the least
significant digit, the positions are visited from the last state down to the
first, and within a state from read symbol 1 down to read symbol 0. Each
transition contributes three digits, in this order:
    - next_state (base N+1)
    - shift      (base 2, 1 = RIGHT)
    - write      (base 2)

Example (2 states, bases 3, 2, 2):
    18371 -> 1RB1LB_1LA1RC  (the 2-state busy beaver)

Both encode() and decode() walk the same digit_layout(), so the two
directions cannot disagree about the ordering.
"""

import re
from typing import List, Tuple

from transition_table import InvalidArgument, Shift, Symbol, TransitionTable

NEXT_STATE = 'next_state'
SHIFT = 'shift'
WRITE = 'write_symbol'

_DECIMAL = re.compile(r'[0-9]+')
# stays well under the interpreter's int/str digit limit
_CHUNK_DIGITS = 1000


def space_size(n_states: int) -> int:
    """Number of distinct tables with n_states states: (4(N+1))^(2N)."""
    if n_states <= 0:
        raise InvalidArgument(f"n_states must be positive, got {n_states}")
    return (4 * (n_states + 1)) ** (2 * n_states)


def digit_layout(n_states: int) -> List[Tuple[int, int, str, int]]:
    """
    List the digit positions of a machine number, least significant first.

    Returns:
        List of (state, symbol, field, base) tuples, 6 * n_states long
    """
    if n_states <= 0:
        raise InvalidArgument(f"n_states must be positive, got {n_states}")
    layout = []
    for state in range(n_states - 1, -1, -1):
        for symbol in (1, 0):
            layout.append((state, symbol, NEXT_STATE, n_states + 1))
            layout.append((state, symbol, SHIFT, 2))
            layout.append((state, symbol, WRITE, 2))
    return layout


def decode(number: int, n_states: int) -> TransitionTable:
    """
    Build the transition table identified by a machine number.

    Numbers at or past space_size(n_states) still decode: the digits are the
    modular residues and whatever quotient is left over is discarded.

    Args:
        number: Non-negative machine number
        n_states: Number of non-halting states

    Returns:
        A complete TransitionTable
    """
    if number < 0:
        raise InvalidArgument(f"machine number must be non-negative, got {number}")

    digits = {}
    remaining = number
    for state, symbol, field, base in digit_layout(n_states):
        remaining, digits[state, symbol, field] = divmod(remaining, base)

    table = TransitionTable(n_states)
    for state in range(n_states):
        for symbol in Symbol:
            table.set(
                state, symbol,
                next_state=digits[state, symbol, NEXT_STATE],
                write_symbol=Symbol(digits[state, symbol, WRITE]),
                shift=Shift.RIGHT if digits[state, symbol, SHIFT] else Shift.LEFT,
            )
    return table


def encode(table: TransitionTable) -> int:
    """
    Compute the machine number of a transition table.

    Raises:
        InvalidArgument: if an entry is undefined or its next state lies
            outside [0, n_states]; such tables are not in the enumeration.
    """
    n_states = table.n_states
    result = 0
    weight = 1
    for state, symbol, field, base in digit_layout(n_states):
        transition = table.get(state, symbol)
        if transition is None:
            raise InvalidArgument(
                f"cannot encode undefined transition at state {state}, symbol {symbol}")
        if field == NEXT_STATE:
            if not 0 <= transition.next_state <= n_states:
                raise InvalidArgument(
                    f"next_state must be in [0, {n_states}], got {transition.next_state} "
                    f"at state {state}, symbol {symbol}")
            digit = transition.next_state
        elif field == SHIFT:
            digit = 1 if transition.shift == Shift.RIGHT else 0
        else:
            digit = int(transition.write_symbol)
        result += digit * weight
        weight *= base
    return result


def parse_machine_number(text: str) -> int:
    """
    Parse a base-10 machine number literal.

    Only digits are accepted (surrounding whitespace is ignored): no sign,
    no separators, no other bases.
    """
    literal = text.strip()
    if not _DECIMAL.fullmatch(literal):
        raise InvalidArgument(f"machine number must be a non-negative decimal integer, got {text!r}")
    result = 0
    for start in range(0, len(literal), _CHUNK_DIGITS):
        chunk = literal[start:start + _CHUNK_DIGITS]
        result = result * 10 ** len(chunk) + int(chunk)
    return result


def format_machine_number(number: int) -> str:
    """
    Render a machine number in base 10, however many digits it has.

    str() refuses integers past the interpreter's digit limit (4300 digits
    by default); the number is converted in fixed-size chunks instead.
    """
    if number < 0:
        raise InvalidArgument(f"machine number must be non-negative, got {number}")
    chunks = []
    unit = 10 ** _CHUNK_DIGITS
    while number >= unit:
        number, low = divmod(number, unit)
        chunks.append(f"{low:0{_CHUNK_DIGITS}d}")
    chunks.append(str(number))
    return ''.join(reversed(chunks))
