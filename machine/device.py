# I/O device model: one server, FIFO waiting queue
import logging
from collections import deque
from typing import Deque, Optional, Protocol

from machine.event import Event
from machine.statistics import Statistics

logger = logging.getLogger(__name__)


class IoClient(Protocol):
    """What the device needs from anything it queues and serves."""

    def io_queued(self) -> None: ...

    def left_io_queue(self, clock: int) -> None: ...

    def io_active(self, mean_duration: int, clock: int) -> Event: ...


class IoDevice:
    """The single I/O device of the simulated system.

    The device never advances time itself: the driver tells it when a process
    asks for I/O (``submit``), when the active operation has ended
    (``remove_active_process`` followed by ``start_io_operation``), and how
    much virtual time has passed (``time_passed``).
    """

    def __init__(self, waiting_queue: Deque[IoClient], avg_io_time: int, statistics: Statistics):
        self.waiting_queue = waiting_queue
        self.avg_io_time = avg_io_time
        self.statistics = statistics
        self.active: Optional[IoClient] = None
        self.idle = True

    @property
    def active_process(self) -> Optional[IoClient]:
        return self.active

    def submit(self, process: IoClient, clock: int) -> Optional[Event]:
        """Queue an I/O request and start an operation if the device is idle.

        Returns the event ending the started operation, or None.
        """
        self.waiting_queue.append(process)
        process.io_queued()

        if self.idle:
            # always the queue head, which need not be the submitter
            self.active = self.waiting_queue.popleft()
            self.idle = False
            self.active.left_io_queue(clock)
            logger.debug("[t=%s] io start pid=%s", clock, getattr(self.active, 'pid', None))
            return self.active.io_active(self.avg_io_time, clock)

        logger.debug("[t=%s] io queued pid=%s len=%d", clock, getattr(process, 'pid', None), len(self.waiting_queue))
        return None

    def start_io_operation(self, clock: int) -> Optional[Event]:
        """Start the next queued operation if the device is free.

        When nothing is started the device is marked idle, even if a process
        still occupies it.
        """
        if self.active is None and self.waiting_queue:
            self.active = self.waiting_queue.popleft()
            self.active.left_io_queue(clock)
            logger.debug("[t=%s] io start pid=%s", clock, getattr(self.active, 'pid', None))
            return self.active.io_active(self.avg_io_time, clock)
        self.idle = True
        return None

    def time_passed(self, time_passed: int) -> None:
        queue_length = len(self.waiting_queue)
        self.statistics.io_queue_length_time += queue_length * time_passed
        if queue_length > self.statistics.io_queue_largest_length:
            self.statistics.io_queue_largest_length = queue_length

    def remove_active_process(self) -> Optional[IoClient]:
        if self.active is None:
            return None
        process = self.active
        self.active = None
        self.statistics.nof_processed_io_operations += 1
        return process

    def __repr__(self):
        return f"IoDevice(active={self.active!r}, queued={len(self.waiting_queue)}, idle={self.idle})"


def make_io_device(avg_io_time: int, statistics: Statistics) -> IoDevice:
    return IoDevice(deque(), avg_io_time, statistics)
