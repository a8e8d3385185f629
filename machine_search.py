"""
Bounded runs and searches over machine numbers.

TuringMachine.run() never gives up, which is right for a machine number
known to halt. For searching, each machine gets a step budget instead:
run_with_limit() drives step() and stops once the budget is spent.

Searches are sequential; every run creates its own TuringMachine.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

import numpy as np

from machine_number import encode, format_machine_number, space_size
from transition_table import Shift, Symbol, TransitionTable
from turing_machine import MachineStatus, TuringMachine, print_step, print_summary


@dataclass
class RunResult:
    """Outcome of one bounded run."""
    number: int
    n_states: int
    status: MachineStatus
    ones: int
    steps: int

    @property
    def halted(self) -> bool:
        return self.status is MachineStatus.HALTED_NORMAL

    @property
    def invalid(self) -> bool:
        return self.status is MachineStatus.HALTED_INVALID

    @property
    def timed_out(self) -> bool:
        return self.status is MachineStatus.RUNNING


def run_with_limit(machine: TuringMachine, max_steps: Optional[int] = None,
                   verbose=False) -> MachineStatus:
    """
    Step a machine until it halts or has taken max_steps steps.

    Args:
        machine: The machine to run (mutated in place)
        max_steps: Step budget counted against machine.steps.
                   None for unlimited.
        verbose: If True, print each step and a summary

    Returns:
        The machine's status; RUNNING means the budget ran out
    """
    if max_steps is not None and max_steps < 0:
        raise ValueError(f"max_steps must be >= 0, got {max_steps}")

    status = machine.status
    while status is MachineStatus.RUNNING:
        if max_steps is not None and machine.steps >= max_steps:
            if verbose:
                print(f"\nReached maximum steps ({max_steps}), stopping.")
            break
        status = machine.step()
        if verbose:
            print_step(machine, status)

    if verbose:
        print_summary(machine)
    return status


def run_number(number: int, n_states: int, max_steps: Optional[int] = None,
               verbose=False) -> RunResult:
    """Decode a machine number and run it under a step budget."""
    machine = TuringMachine.from_number(number, n_states)
    status = run_with_limit(machine, max_steps, verbose=verbose)
    return RunResult(number=number, n_states=n_states, status=status,
                     ones=machine.ones, steps=machine.steps)


def search_numbers(numbers: Iterable[int], n_states: int, max_steps: int,
                   verbose=False) -> List[RunResult]:
    """
    Run every machine number in an iterable under the same step budget.

    Args:
        numbers: Machine numbers to simulate
        n_states: Number of states of every machine
        max_steps: Step budget per machine
        verbose: If True, print one line per machine

    Returns:
        List of RunResult, in input order
    """
    results = []
    for number in numbers:
        result = run_number(number, n_states, max_steps)
        if verbose:
            print(f"{format_machine_number(number):>12} {result.status.value:<8} "
                  f"ones={result.ones:<6} steps={result.steps}")
        results.append(result)
    return results


def search_range(n_states: int, start: int = 0, stop: Optional[int] = None,
                 max_steps: int = 1000, verbose=False) -> List[RunResult]:
    """
    Run the machine numbers in [start, stop) under a step budget.

    stop defaults to the end of the machine number space.
    """
    if stop is None:
        stop = space_size(n_states)
    if start < 0:
        raise ValueError(f"start must be non-negative, got {start}")
    return search_numbers(range(start, stop), n_states, max_steps, verbose=verbose)


def random_table(n_states: int, rng: np.random.Generator) -> TransitionTable:
    """Draw a complete table uniformly, one field at a time."""
    table = TransitionTable(n_states)
    next_states = rng.integers(0, n_states + 1, size=(n_states, 2))
    writes = rng.integers(0, 2, size=(n_states, 2))
    shifts = rng.integers(0, 2, size=(n_states, 2))
    for state in range(n_states):
        for symbol in Symbol:
            table.set(state, symbol, int(next_states[state, symbol]),
                      Symbol(int(writes[state, symbol])), Shift(int(shifts[state, symbol])))
    return table


def simulate_random_machines(n_states: int, n_runs: int, max_steps: int = 1000,
                             seed=None, verbose=False) -> List[RunResult]:
    """
    Simulate uniformly random machines of n_states states.

    Machines are drawn field by field, which is uniform over the machine
    number space without ever sampling an integer that large.

    Args:
        n_states: Number of states
        n_runs: Number of machines to simulate
        max_steps: Step budget per machine
        seed: Optional random seed for reproducibility
        verbose: If True, print one line per machine
    """
    rng = np.random.default_rng(seed)
    numbers = [encode(random_table(n_states, rng)) for _ in range(n_runs)]
    return search_numbers(numbers, n_states, max_steps, verbose=verbose)


def results_to_numpy(results: List[RunResult]) -> np.ndarray:
    """
    Summarize results as an array of shape (n_results, 4).

    Columns are [halted, invalid, ones, steps]; halted and invalid are 0/1.
    Machine numbers can exceed int64 and are left out; they stay on the
    RunResult objects.
    """
    arr = np.zeros((len(results), 4), dtype=np.int64)
    for i, result in enumerate(results):
        arr[i] = (result.halted, result.invalid, result.ones, result.steps)
    return arr


def best_result(results: List[RunResult], by='ones') -> Optional[RunResult]:
    """
    Return the champion among halted results.

    Args:
        results: Results of a search
        by: 'ones' (Σ, ties broken by steps) or 'steps' (S, ties broken by ones)
    """
    if by not in ('ones', 'steps'):
        raise ValueError(f"by must be 'ones' or 'steps', got '{by}'")
    halted = [r for r in results if r.halted]
    if not halted:
        return None
    if by == 'ones':
        return max(halted, key=lambda r: (r.ones, r.steps))
    return max(halted, key=lambda r: (r.steps, r.ones))
