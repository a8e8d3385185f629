"""
Turing Machine Engine

Runs an N-state binary machine given by a TransitionTable on a blank tape.
The machine starts in state 0 on a single ZERO cell; state N is the halting
state.

Each step:
    - reads the symbol under the head
    - looks up the transition for (state, read)
    - updates the ones counter (ZERO->ONE +1, ONE->ZERO -1) and step counter
    - writes, changes state and moves the head

Every step returns a MachineStatus:
    - RUNNING: more steps can be taken
    - HALTED_NORMAL: the halting state was reached
    - HALTED_INVALID: the machine reached an undefined transition

On HALTED_NORMAL the ones counter is Σ and the step counter is S in busy
beaver terms. HALTED_INVALID leaves both counters (and the tape) as they
were after the last valid step.

run() has no step limit; a machine that never halts runs forever. Callers
that need a budget drive step() themselves (see machine_search.run_with_limit).
"""

from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from machine_number import decode, encode
from transition_table import Symbol, TransitionTable
from turing_tape import Tape


class MachineStatus(Enum):
    RUNNING = 'running'
    HALTED_NORMAL = 'halted'
    HALTED_INVALID = 'invalid'


class TuringMachine:
    """
    A single run of a transition table.

    Args:
        table: The machine's TransitionTable
        record_history: If True, keep the 5-tuple
                        (state, read, write, shift, next_state) of every step
    """

    def __init__(self, table: TransitionTable, record_history=False):
        self.table = table
        self.halt_state = table.halt_state
        self.tape = Tape()
        self.state = 0
        self.ones = 0
        self.steps = 0
        self.status = MachineStatus.RUNNING
        self.history: Optional[List[Tuple[int, int, int, int, int]]] = [] if record_history else None

    @classmethod
    def from_number(cls, number: int, n_states: int, record_history=False) -> 'TuringMachine':
        """Create a machine from its machine number."""
        return cls(decode(number, n_states), record_history=record_history)

    @property
    def machine_number(self) -> int:
        return encode(self.table)

    @property
    def halted(self) -> bool:
        return self.status is not MachineStatus.RUNNING

    def step(self) -> MachineStatus:
        """Execute one transition. A halted machine is left unchanged."""
        if self.status is not MachineStatus.RUNNING:
            return self.status

        read = self.tape.read()
        transition = None
        if 0 <= self.state < self.table.n_states:
            transition = self.table.get(self.state, read)
        if transition is None:
            self.status = MachineStatus.HALTED_INVALID
            return self.status

        write = transition.write_symbol
        if read == Symbol.ZERO and write == Symbol.ONE:
            self.ones += 1
        elif read == Symbol.ONE and write == Symbol.ZERO:
            self.ones -= 1
        self.steps += 1

        if self.history is not None:
            self.history.append(
                (self.state, int(read), int(write), int(transition.shift), transition.next_state))

        self.tape.write(write)
        self.state = transition.next_state
        if transition.shift:
            self.tape.move_right()
        else:
            self.tape.move_left()

        if self.state == self.halt_state:
            self.status = MachineStatus.HALTED_NORMAL
        return self.status

    def run(self) -> MachineStatus:
        """Step until the machine halts, normally or on an undefined transition."""
        while self.status is MachineStatus.RUNNING:
            self.step()
        return self.status

    def __repr__(self):
        return (f"TuringMachine(state={self.state}, status={self.status.name}, "
                f"ones={self.ones}, steps={self.steps})")


def history_to_numpy(history, halt_state=None, include_halt_row=True):
    """
    Convert execution history to a numpy array of shape (n_steps, 5).

    Args:
        history: List of 5-tuples from TuringMachine(record_history=True)
        halt_state: The machine's halting state, used for the halt row.
                    If None, the next_state of the last step is used.
        include_halt_row: If True (default), adds a final row
                          [-1, -1, -1, -1, final_state]

    Returns:
        numpy array with columns [state, read, write, shift, next_state]
        where shift is L=0, R=1
    """
    if not history:
        return np.array([], dtype=np.int32).reshape(0, 5)

    n_steps = len(history)
    total_rows = n_steps + 1 if include_halt_row else n_steps
    arr = np.zeros((total_rows, 5), dtype=np.int32)
    arr[:n_steps] = history

    if include_halt_row:
        final_state = history[-1][4] if halt_state is None else halt_state
        arr[n_steps, :4] = -1
        arr[n_steps, 4] = final_state

    return arr


def print_step(machine: TuringMachine, status: MachineStatus):
    """Print the outcome of the latest step of a machine."""
    if status is MachineStatus.HALTED_INVALID:
        print(f"\nNo transition for state={machine.state}, "
              f"read={int(machine.tape.read())}. Invalid state, halting execution.")
        return
    print(f"Step {machine.steps}: State={machine.state}, "
          f"Head={machine.tape.position}, Ones={machine.ones}")


def print_summary(machine: TuringMachine):
    """Print the final counters of a machine, as reported for busy beavers."""
    if machine.status is MachineStatus.HALTED_NORMAL:
        print("TM halted.")
    elif machine.status is MachineStatus.HALTED_INVALID:
        print("TM reached an undefined transition.")
    else:
        print("TM did not halt.")
    print(f"Ones (Σ): {machine.ones}, Transitions (S): {machine.steps}")
