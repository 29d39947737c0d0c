# Round-robin CPU
import logging
from collections import deque
from typing import Deque, Optional

from machine.event import Event
from machine.process import Process
from machine.statistics import Statistics

logger = logging.getLogger(__name__)


class Cpu:
    def __init__(self, ready_queue: Deque[Process], max_cpu_time: int, statistics: Statistics):
        self.ready_queue = ready_queue
        self.max_cpu_time = max_cpu_time
        self.statistics = statistics
        self.running: Optional[Process] = None
        self.last_ran: Optional[Process] = None

    @property
    def active_process(self) -> Optional[Process]:
        return self.running

    def has_ready(self) -> bool:
        return bool(self.ready_queue)

    def insert_process(self, process: Process, clock: int) -> Optional[Event]:
        """Add a process to the ready queue, dispatching it if the CPU is free."""
        self.ready_queue.append(process)
        process.entered_ready_queue(clock)
        if self.running is None:
            return self.switch_process(clock)
        return None

    def switch_process(self, clock: int) -> Optional[Event]:
        """Preempt the running process (if any) and dispatch the queue head.

        Returns the event ending the new CPU slice, or None if the CPU stays idle.
        """
        if self.running is not None:
            self.running.left_cpu(clock)
            self.ready_queue.append(self.running)
            self.running.entered_ready_queue(clock)
            self.running = None

        if not self.has_ready():
            return None

        self.running = self.ready_queue.popleft()
        self.running.left_ready_queue(clock)
        if self.last_ran is not None and self.last_ran is not self.running:
            self.statistics.nof_process_switches += 1
        self.last_ran = self.running
        logger.debug("[t=%s] dispatch pid=%s ready=%d", clock, self.running.pid, len(self.ready_queue))
        return self.running.run(self.max_cpu_time, clock)

    def remove_active_process(self, clock: int) -> Optional[Process]:
        if self.running is None:
            return None
        process = self.running
        process.left_cpu(clock)
        self.running = None
        return process

    def time_passed(self, time_passed: int) -> None:
        queue_length = len(self.ready_queue)
        self.statistics.cpu_queue_length_time += queue_length * time_passed
        if queue_length > self.statistics.cpu_queue_largest_length:
            self.statistics.cpu_queue_largest_length = queue_length
        if self.running is not None:
            self.statistics.total_busy_cpu_time += time_passed

    def __repr__(self):
        return f"Cpu(quantum={self.max_cpu_time}, running={self.running!r}, ready={len(self.ready_queue)})"


def make_cpu(max_cpu_time: int, statistics: Statistics) -> Cpu:
    return Cpu(deque(), max_cpu_time, statistics)
