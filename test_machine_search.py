import numpy as np
import pytest

from machine_number import decode, encode, space_size
from machine_search import (
    RunResult, best_result, random_table, results_to_numpy, run_number, run_with_limit,
    search_numbers, search_range, simulate_random_machines,
)
from standard_format import parse_standard_format
from turing_machine import MachineStatus, TuringMachine

# A: write 1, move right, stay in A - never halts
RUNAWAY = parse_standard_format('1RA1RA')


def test_run_with_limit_stops_runaway():
    machine = TuringMachine(RUNAWAY)
    assert run_with_limit(machine, 50) is MachineStatus.RUNNING
    assert machine.steps == 50
    assert machine.ones == 50


def test_run_with_limit_can_resume():
    machine = TuringMachine(RUNAWAY)
    run_with_limit(machine, 10)
    run_with_limit(machine, 25)
    assert machine.steps == 25


def test_run_with_limit_halting_machine():
    machine = TuringMachine.from_number(14642600, 3)
    assert run_with_limit(machine, 1000) is MachineStatus.HALTED_NORMAL
    assert (machine.ones, machine.steps) == (6, 14)


def test_run_with_limit_exact_budget():
    machine = TuringMachine.from_number(18371, 2)
    assert run_with_limit(machine, 5) is MachineStatus.RUNNING
    assert run_with_limit(machine, 6) is MachineStatus.HALTED_NORMAL


def test_run_with_limit_unbounded():
    machine = TuringMachine.from_number(21216477565, 4)
    assert run_with_limit(machine) is MachineStatus.HALTED_NORMAL
    assert machine.steps == 107


def test_run_with_limit_negative_budget():
    with pytest.raises(ValueError):
        run_with_limit(TuringMachine(RUNAWAY), -1)


def test_run_with_limit_verbose(capsys):
    run_with_limit(TuringMachine.from_number(18371, 2), verbose=True)
    out = capsys.readouterr().out
    assert "Step 6:" in out
    assert "TM halted." in out
    assert "Ones (Σ): 4, Transitions (S): 6" in out


def test_run_number():
    result = run_number(18371, 2, max_steps=100)
    assert result == RunResult(number=18371, n_states=2, status=MachineStatus.HALTED_NORMAL,
                               ones=4, steps=6)
    assert result.halted and not result.invalid and not result.timed_out


def test_run_number_timeout():
    result = run_number(encode(RUNAWAY), 1, max_steps=20)
    assert result.timed_out
    assert result.steps == 20


def test_search_range_finds_two_state_champion():
    results = search_range(2, max_steps=20)
    assert len(results) == space_size(2)
    best = best_result(results)
    assert (best.ones, best.steps) == (4, 6)
    assert best_result(results, by='steps').steps == 6


def test_search_range_one_state():
    results = search_range(1, max_steps=10)
    assert [r.number for r in results] == list(range(64))
    halted = [r for r in results if r.halted]
    # a halting 1-state machine halts on its first step
    assert all(r.steps == 1 for r in halted)
    assert best_result(results).ones == 1


def test_search_numbers_keeps_order():
    results = search_numbers([18371, 0, 56], 2, max_steps=10)
    assert [r.number for r in results] == [18371, 0, 56]


def test_best_result_without_halts():
    assert best_result([run_number(encode(RUNAWAY), 1, max_steps=5)]) is None
    with pytest.raises(ValueError):
        best_result([], by='time')


def test_results_to_numpy():
    results = [run_number(18371, 2, 100), run_number(encode(RUNAWAY), 1, 7)]
    arr = results_to_numpy(results)
    assert arr.shape == (2, 4)
    np.testing.assert_array_equal(arr, [[1, 0, 4, 6], [0, 0, 7, 7]])


def test_random_table_is_complete_and_encodable():
    rng = np.random.default_rng(0)
    for _ in range(20):
        table = random_table(4, rng)
        assert table.is_complete()
        assert decode(encode(table), 4) == table


def test_simulate_random_machines_reproducible():
    first = simulate_random_machines(3, n_runs=10, max_steps=50, seed=20)
    second = simulate_random_machines(3, n_runs=10, max_steps=50, seed=20)
    assert len(first) == 10
    assert first == second
    assert all(0 <= r.number < space_size(3) for r in first)
    assert all(r.steps <= 50 for r in first)
