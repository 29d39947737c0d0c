import random

import pytest

from machine.event import EventType
from machine.process import Process, draw_duration
from machine.statistics import Statistics


def make_process(cpu_needed=1000, next_io=300, pid=1, clock=0):
    p = Process(pid, clock, random.Random(0))
    p.cpu_time_needed = cpu_needed
    p.time_to_next_io_operation = next_io
    return p


@pytest.mark.parametrize('mean', [1, 2, 10, 225, 5000])
def test_draw_duration_bounds(mean):
    rng = random.Random(1234)
    for _ in range(200):
        d = draw_duration(rng, mean)
        assert d >= 1
        assert mean * 0.5 - 1 <= d <= mean * 1.5 + 1


def test_random_parameters_in_range():
    rng = random.Random(99)
    for pid in range(50):
        p = Process(pid, 0, rng)
        assert 100 <= p.cpu_time_needed <= 10000
        assert p.cpu_time_needed / 100 <= p.avg_io_interval <= 26 * p.cpu_time_needed / 100
        assert p.time_to_next_io_operation >= 1


def test_run_quantum_expires_first():
    p = make_process(cpu_needed=1000, next_io=800)
    ev = p.run(500, 100)
    assert ev.type is EventType.SWITCH_PROCESS
    assert ev.time == 600
    assert ev.process is p


def test_run_io_request_first():
    p = make_process(cpu_needed=1000, next_io=300)
    ev = p.run(500, 0)
    assert ev.type is EventType.IO_REQUEST
    assert ev.time == 300


def test_run_end_process_wins_ties():
    p = make_process(cpu_needed=300, next_io=300)
    ev = p.run(300, 0)
    assert ev.type is EventType.END_PROCESS
    assert ev.time == 300


def test_left_cpu_accounts_time_and_redraws_io_interval():
    p = make_process(cpu_needed=1000, next_io=300)
    p.entered_ready_queue(0)
    p.left_ready_queue(50)
    p.run(500, 50)
    p.left_cpu(350)
    assert p.time_in_ready_queue == 50
    assert p.time_in_cpu == 300
    assert p.time_to_next_io_operation >= 1
    assert p.remaining_cpu_time() == 700


def test_io_bookkeeping():
    p = make_process()
    p.run(500, 0)
    p.left_cpu(300)
    p.io_queued()
    p.left_io_queue(320)
    ev = p.io_active(225, 320)
    assert ev.type is EventType.END_IO
    assert ev.process is p
    assert ev.time > 320
    p.left_io(ev.time)
    assert p.nof_times_in_io_queue == 1
    assert p.time_in_io_queue == 20
    assert p.time_in_io == ev.time - 320


def test_update_statistics_folds_totals():
    stats = Statistics()
    p = make_process()
    p.entered_ready_queue(0)
    p.left_ready_queue(10)
    p.time_in_cpu = 1000
    p.update_statistics(stats)
    assert stats.nof_completed_processes == 1
    assert stats.total_time_in_ready_queue == 10
    assert stats.total_time_in_cpu == 1000
    assert stats.total_nof_times_in_ready_queue == 1
    assert p.state == 'EXIT'
