import numpy as np
import pytest

from machine_number import decode
from standard_format import load_busy_beavers, parse_standard_format
from transition_table import Shift, Symbol, TransitionTable
from turing_machine import MachineStatus, TuringMachine, history_to_numpy


def test_initial_machine():
    machine = TuringMachine.from_number(18371, 2)
    assert machine.state == 0
    assert machine.halt_state == 2
    assert machine.ones == 0
    assert machine.steps == 0
    assert machine.status is MachineStatus.RUNNING
    assert machine.tape.read() == Symbol.ZERO
    assert machine.machine_number == 18371


@pytest.mark.parametrize("number, n_states, ones, steps", [
    (56, 1, 1, 1),
    (18371, 2, 4, 6),
    (14642600, 3, 6, 14),
    (21216477565, 4, 13, 107),
])
def test_busy_beavers_run_to_halt(number, n_states, ones, steps):
    machine = TuringMachine.from_number(number, n_states)
    assert machine.run() is MachineStatus.HALTED_NORMAL
    assert machine.state == n_states
    assert machine.ones == ones
    assert machine.steps == steps
    assert machine.tape.count_ones() == ones


def test_catalog_champions_that_fit_in_a_test():
    for champion in load_busy_beavers():
        if champion['steps'] > 1000:
            continue
        machine = TuringMachine(parse_standard_format(champion['standard']))
        machine.run()
        assert machine.machine_number == champion['number']
        assert (machine.ones, machine.steps) == (champion['ones'], champion['steps'])


def test_step_by_step_two_state_champion():
    machine = TuringMachine.from_number(18371, 2)
    statuses = [machine.step() for _ in range(6)]
    assert statuses[:-1] == [MachineStatus.RUNNING] * 5
    assert statuses[-1] is MachineStatus.HALTED_NORMAL
    assert machine.tape.to_string() == '1111'


@pytest.mark.parametrize("number, n_states", [
    (18371, 2), (14642600, 3), (21216477565, 4), (12345, 2), (987654, 3),
])
def test_ones_counter_matches_tape(number, n_states):
    machine = TuringMachine.from_number(number, n_states)
    for _ in range(200):
        machine.step()
        assert machine.ones == machine.tape.count_ones()
        if machine.halted:
            break


def test_undefined_transition_halts_invalid():
    table = TransitionTable(2)
    table.set(0, 0, 1, Symbol.ONE, Shift.RIGHT)
    # state B reading 0 is left unset
    machine = TuringMachine(table)
    assert machine.step() is MachineStatus.RUNNING
    assert machine.step() is MachineStatus.HALTED_INVALID
    assert machine.ones == 1
    assert machine.steps == 1
    assert machine.state == 1
    assert machine.tape.position == 1

    # no further steps are taken
    assert machine.step() is MachineStatus.HALTED_INVALID
    assert machine.run() is MachineStatus.HALTED_INVALID
    assert (machine.ones, machine.steps) == (1, 1)


def test_empty_table_halts_invalid_immediately():
    machine = TuringMachine(TransitionTable(3))
    assert machine.run() is MachineStatus.HALTED_INVALID
    assert machine.steps == 0


def test_next_state_past_halt_is_invalid():
    table = TransitionTable(1)
    table.set(0, 0, 5, Symbol.ONE, Shift.LEFT)
    machine = TuringMachine(table)
    assert machine.step() is MachineStatus.RUNNING
    assert machine.step() is MachineStatus.HALTED_INVALID
    assert machine.steps == 1


def test_halted_machine_does_not_step():
    machine = TuringMachine.from_number(56, 1)
    machine.run()
    assert machine.step() is MachineStatus.HALTED_NORMAL
    assert machine.steps == 1


def test_ones_counter_decrements():
    # A: write 1, go right to B; B: go left to C; C reads 1, erases it and halts
    table = parse_standard_format('1RB---_0LC---_---0RD')
    machine = TuringMachine(table)
    assert machine.run() is MachineStatus.HALTED_NORMAL
    assert machine.ones == 0
    assert machine.steps == 3


def test_machines_are_independent():
    table = decode(18371, 2)
    first = TuringMachine(table)
    second = TuringMachine(table)
    first.run()
    assert second.steps == 0
    assert second.tape.count_ones() == 0


def test_history_to_numpy():
    machine = TuringMachine.from_number(18371, 2, record_history=True)
    machine.run()
    arr = history_to_numpy(machine.history)
    assert arr.shape == (7, 5)
    np.testing.assert_array_equal(arr[0], [0, 0, 1, 1, 1])
    np.testing.assert_array_equal(arr[-1], [-1, -1, -1, -1, 2])

    arr = history_to_numpy(machine.history, include_halt_row=False)
    assert arr.shape == (6, 5)


def test_history_off_by_default():
    machine = TuringMachine.from_number(18371, 2)
    machine.run()
    assert machine.history is None
    assert history_to_numpy([]).shape == (0, 5)
