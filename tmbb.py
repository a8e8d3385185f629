"""
Busy beaver machine numbers - interactive menu.

Asks for a state count and one of:
    0: Get Table   - decode a machine number, print its table and number
    1: Get Number  - parse a standard-format table, print it and its number
    2: Run         - decode a machine number and run it until it halts
                     (or until TMBB_MAX_STEPS steps, if set)

Exit codes:
    0 - success
    1 - bad input, or the machine reached an undefined transition
    2 - the step limit was reached before the machine halted
"""

import sys

from machine_number import decode, encode, format_machine_number, parse_machine_number
from machine_search import run_with_limit
from standard_format import format_standard, parse_standard_format, render_table
from tmbb_config import load_settings
from turing_machine import MachineStatus, TuringMachine, history_to_numpy

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_STEP_LIMIT = 2


def _print_table_and_number(table):
    print(render_table(table))
    print(f"\nStd Format: {format_standard(table)}")
    print(f"TM Number: {format_machine_number(encode(table))}")


def get_table(n_states: int) -> int:
    number = parse_machine_number(input("TM Number: "))
    _print_table_and_number(decode(number, n_states))
    return EXIT_OK


def get_number(n_states: int) -> int:
    table = parse_standard_format(input("Std Format: "), n_states)
    _print_table_and_number(table)
    return EXIT_OK


def run(n_states: int, settings) -> int:
    number = parse_machine_number(input("TM Number: "))
    machine = TuringMachine.from_number(number, n_states, record_history=settings.history)
    print(render_table(machine.table))
    print()

    status = run_with_limit(machine, settings.max_steps, verbose=settings.verbose)
    if not settings.verbose:
        if status is MachineStatus.HALTED_NORMAL:
            print("TM halted.")
        print(f"Ones (Σ): {machine.ones}, Transitions (S): {machine.steps}")

    if settings.history:
        print("\n  [state, read, write, shift, next_state]")
        print(history_to_numpy(machine.history, include_halt_row=status is MachineStatus.HALTED_NORMAL))

    if status is MachineStatus.HALTED_INVALID:
        print("Invalid state, halting execution.")
        return EXIT_INVALID
    if status is MachineStatus.RUNNING:
        print(f"No halt within {settings.max_steps} steps.")
        return EXIT_STEP_LIMIT
    return EXIT_OK


def main() -> int:
    try:
        settings = load_settings()
        n_states = int(input("States: "))
        if n_states <= 0:
            print(f"States must be positive, got {n_states}")
            return EXIT_INVALID
        choice = int(input("(0: Get Table 1: Get Number 2: Run)\nChoice: "))
    except EOFError:
        return EXIT_INVALID
    except ValueError as e:
        print(e)
        return EXIT_INVALID

    actions = {
        0: lambda: get_table(n_states),
        1: lambda: get_number(n_states),
        2: lambda: run(n_states, settings),
    }
    if choice not in actions:
        print("No.")
        return EXIT_INVALID

    try:
        return actions[choice]()
    except EOFError:
        return EXIT_INVALID
    except ValueError as e:
        print(e)
        return EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
