"""
Text formats for transition tables.

Standard format (one line, states separated by '_'):
    1RB1LB_1LA1RC

Each state contributes two 3-character groups, for read symbols 0 and 1:
    <write><shift><next_state>
    - write: '0' or '1'
    - shift: 'L' or 'R'
    - next_state: 'A' for state 0, 'B' for state 1, ...; the letter after the
      last real state is the halting state
A group of '---' marks a transition that is not defined.
Letters stop at 'Z', so tables of up to 25 states (halt = 'Z') can be
written this way; larger tables are rejected.

YAML format (the online Turing machine notation, restricted to symbols 0/1):
    start state: A
    table:
      A:
        0: {write: 1, R: B}
        1: {write: 1, L: B}
      B:
        0: {write: 1, L: A}
        1: {write: 1, R: H}
      H:
"""

import re
from typing import Dict, List

import yaml

from transition_table import Shift, Symbol, TransitionTable

STATE_DELIMITER = '_'
UNDEFINED_GROUP = '---'

# 'Z', the halting state of a 25-state table
MAX_LETTER_STATE = 25

_GROUP = re.compile(r'([01])([LR])([A-Z])')


def state_letter(state: int) -> str:
    """Letter used for a state in standard format ('A' = state 0)."""
    if not 0 <= state <= MAX_LETTER_STATE:
        raise ValueError(f"State {state} has no letter; standard format stops at 'Z'")
    return chr(ord('A') + state)


def _check_letter_range(n_states):
    if n_states > MAX_LETTER_STATE:
        raise ValueError(
            f"Standard format covers at most {MAX_LETTER_STATE} states, got {n_states}")


def parse_standard_format(text: str, n_states=None) -> TransitionTable:
    """
    Parse a standard-format string into a TransitionTable.

    Args:
        text: Standard format, e.g. '1RB1LB_1LA1RC'
        n_states: Expected number of states. If None, it is taken from the
                  number of '_'-separated rows.

    Returns:
        TransitionTable with one entry per group ('---' entries stay undefined)
    """
    rows = text.strip().split(STATE_DELIMITER)
    if n_states is None:
        n_states = len(rows)
    if len(rows) != n_states:
        raise ValueError(f"Expected {n_states} states, got {len(rows)} in {text!r}")
    _check_letter_range(n_states)

    table = TransitionTable(n_states)
    for state, row in enumerate(rows):
        if len(row) != 6:
            raise ValueError(f"Not in standard TM text format: {text!r} (state {state_letter(state)})")
        for symbol in Symbol:
            group = row[3 * symbol:3 * symbol + 3]
            if group == UNDEFINED_GROUP:
                continue
            match = _GROUP.fullmatch(group)
            if match is None:
                raise ValueError(f"Cannot parse transition {group!r} in {text!r}")
            write, shift, letter = match.groups()
            next_state = ord(letter) - ord('A')
            if next_state > n_states:
                raise ValueError(
                    f"Next state {letter!r} is past the halting state "
                    f"{state_letter(n_states)!r} in {text!r}")
            table.set(state, symbol, next_state,
                      Symbol(int(write)), Shift.RIGHT if shift == 'R' else Shift.LEFT)
    return table


def format_transition(transition) -> str:
    if transition is None:
        return UNDEFINED_GROUP
    return f"{int(transition.write_symbol)}{'R' if transition.shift else 'L'}{state_letter(transition.next_state)}"


def format_standard(table: TransitionTable) -> str:
    """Render a TransitionTable in standard format."""
    _check_letter_range(table.n_states)
    rows = []
    for state in range(table.n_states):
        rows.append(''.join(format_transition(table.get(state, symbol)) for symbol in Symbol))
    return STATE_DELIMITER.join(rows)


def render_table(table: TransitionTable) -> str:
    """
    Render a TransitionTable as a grid, one column per state:

        -----------------
        |   |  A  |  B  |
        -----------------
        | 0 | 1RB | 1LA |
        | 1 | 1LB | 1RC |
        -----------------
    """
    _check_letter_range(table.n_states)
    rule = '-----' + '------' * table.n_states
    header = '|   |' + ''.join(f"  {state_letter(state)}  |" for state in range(table.n_states))
    lines = [rule, header, rule]
    for symbol in Symbol:
        cells = ''.join(f" {format_transition(table.get(state, symbol))} |"
                        for state in range(table.n_states))
        lines.append(f"| {int(symbol)} |{cells}")
    lines.append(rule)
    return '\n'.join(lines)


def _preprocess_yaml_keys(yaml_string):
    """
    Quote list-style keys so YAML accepts them.

    Example: '[0,1]: R' becomes '"[0,1]": R'
    """
    pattern = r'^(\s*)(\[[^\]]+\])(\s*:)'

    processed_lines = []
    for line in yaml_string.split('\n'):
        match = re.match(pattern, line)
        if match:
            indent, key, colon = match.groups()
            processed_lines.append(f'{indent}"{key}"{colon}{line[match.end():]}')
        else:
            processed_lines.append(line)

    return '\n'.join(processed_lines)


def _parse_symbol_key(key) -> List[int]:
    """
    Parse a read-symbol key which may be a single symbol or a group.

    Examples:
        0 -> [0]
        '[0,1]' -> [0, 1]
    """
    key_str = str(key)
    if key_str.startswith('[') and key_str.endswith(']'):
        symbols = [s.strip().strip("'\"") for s in key_str[1:-1].split(',')]
    else:
        symbols = [key_str]

    for s in symbols:
        if s not in ('0', '1'):
            raise ValueError(f"Only binary symbols are supported, got {s!r}")
    return [int(s) for s in symbols]


def _parse_transition_value(state_name, read_symbol, value):
    """
    Parse a rule into (write, shift, next_state_name).

    Handles:
        'R' / 'L' -> keep symbol, move, same state
        {L: next} / {R: next} -> keep symbol, move, go to next
        {write: x, L: next} / {write: x, R: next}
        {write: x, L} -> write, move, same state
    """
    if value in ('R', 'L'):
        return read_symbol, value, state_name

    if isinstance(value, dict):
        write = value.get('write', read_symbol)
        if str(write) not in ('0', '1'):
            raise ValueError(f"Only binary symbols are supported, got write {write!r}")

        for direction in ('L', 'R'):
            if direction in value:
                next_state = value[direction]
                return int(write), direction, state_name if next_state is None else next_state

        raise ValueError(f"No direction (L/R) found in transition: {value}")

    raise ValueError(f"Cannot parse transition value: {value}")


def parse_yaml_machine(yaml_string: str) -> TransitionTable:
    """
    Parse a binary machine written in YAML into a TransitionTable.

    The start state becomes state 0 and the other states with rules are
    numbered in the order they appear. States listed without rules are
    halting states and all map to the table's halting state.
    """
    data = yaml.safe_load(_preprocess_yaml_keys(yaml_string))
    table_data = data.get('table') or {}
    if not table_data:
        raise ValueError("YAML machine has no 'table'")

    start_state = data.get('start state', data.get('start_state', next(iter(table_data))))
    if start_state not in table_data:
        raise ValueError(f"Start state {start_state!r} is not in the table")

    working = [name for name, rules in table_data.items() if rules is not None]
    if start_state not in working:
        raise ValueError(f"Start state {start_state!r} has no transitions")
    working.remove(start_state)
    working.insert(0, start_state)

    numbering: Dict[object, int] = {name: i for i, name in enumerate(working)}
    halt = len(working)
    for name, rules in table_data.items():
        if rules is None:
            numbering[name] = halt

    table = TransitionTable(len(working))
    for name in working:
        for key, value in table_data[name].items():
            for read_symbol in _parse_symbol_key(key):
                write, direction, next_name = _parse_transition_value(name, read_symbol, value)
                if next_name not in numbering:
                    raise ValueError(f"Transition from {name!r} goes to undeclared state {next_name!r}")
                table.set(numbering[name], read_symbol, numbering[next_name],
                          Symbol(write), Shift.RIGHT if direction == 'R' else Shift.LEFT)
    return table


# Known busy beaver champions
# machine number, Σ (ones), S (steps) and standard format per state count
BUSY_BEAVERS_YAML = """
busy_beavers:
  - states: 1
    number: 56
    ones: 1
    steps: 1
    standard: 1RB0LA
  - states: 2
    number: 18371
    ones: 4
    steps: 6
    standard: 1RB1LB_1LA1RC
  - states: 3
    number: 14642600
    ones: 6
    steps: 14
    standard: 1RB1RD_0RC1RB_1LC1LA
  - states: 4
    number: 21216477565
    ones: 13
    steps: 107
    standard: 1RB1LB_1LA0LC_1RE1LD_1RD0RA
  - states: 5
    number: 51830926765032
    ones: 4098
    steps: 47176870
    standard: 1RB1LC_1RC1RB_1RD0LE_1LA1LD_1RF0LA
"""


def load_busy_beavers(yaml_string=BUSY_BEAVERS_YAML) -> List[dict]:
    """
    Load the champion catalog.

    Returns:
        List of dicts with keys 'states', 'number', 'ones', 'steps', 'standard'
    """
    data = yaml.safe_load(yaml_string)
    return list(data['busy_beavers'])
