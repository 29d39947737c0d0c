import random

from machine.event import Event, EventType
from machine.statistics import Statistics


def draw_duration(rng: random.Random, mean: float) -> int:
    """Uniform draw in [mean/2, 3*mean/2], never below 1."""
    return max(1, int(round(mean * (0.5 + rng.random()))))


class Process:
    def __init__(self, pid: int, creation_time: int, rng: random.Random):
        self.pid = pid
        self.creation_time = creation_time
        self.rng = rng
        self.cpu_time_needed = rng.randint(100, 10000)
        self.avg_io_interval = (1 + rng.random() * 25) * self.cpu_time_needed / 100
        self.time_to_next_io_operation = draw_duration(rng, self.avg_io_interval)
        self.state = 'NEW'

        self.time_of_last_event = creation_time
        self.time_in_ready_queue = 0
        self.time_in_cpu = 0
        self.time_in_io_queue = 0
        self.time_in_io = 0
        self.nof_times_in_ready_queue = 0
        self.nof_times_in_io_queue = 0

    def remaining_cpu_time(self) -> int:
        return self.cpu_time_needed - self.time_in_cpu

    def _elapsed(self, clock: int) -> int:
        elapsed = clock - self.time_of_last_event
        self.time_of_last_event = clock
        return elapsed

    # ready queue / CPU
    def entered_ready_queue(self, clock: int) -> None:
        self.state = 'READY'
        self.nof_times_in_ready_queue += 1
        self.time_of_last_event = clock

    def left_ready_queue(self, clock: int) -> None:
        self.time_in_ready_queue += self._elapsed(clock)

    def run(self, max_cpu_time: int, clock: int) -> Event:
        """Start a CPU slice and return the event that ends it.

        The slice ends at whichever comes first of process completion, the
        next I/O request and quantum expiry; ties resolve in that order.
        """
        self.state = 'RUNNING'
        remaining = self.remaining_cpu_time()
        if remaining <= min(self.time_to_next_io_operation, max_cpu_time):
            return Event(clock + remaining, EventType.END_PROCESS, self)
        if self.time_to_next_io_operation <= max_cpu_time:
            return Event(clock + self.time_to_next_io_operation, EventType.IO_REQUEST, self)
        return Event(clock + max_cpu_time, EventType.SWITCH_PROCESS, self)

    def left_cpu(self, clock: int) -> None:
        ran_for = self._elapsed(clock)
        self.time_in_cpu += ran_for
        self.time_to_next_io_operation -= ran_for
        if self.time_to_next_io_operation <= 0:
            self.time_to_next_io_operation = draw_duration(self.rng, self.avg_io_interval)

    # I/O
    def io_queued(self) -> None:
        self.state = 'BLOCKED'
        self.nof_times_in_io_queue += 1

    def left_io_queue(self, clock: int) -> None:
        self.time_in_io_queue += self._elapsed(clock)

    def io_active(self, mean_duration: int, clock: int) -> Event:
        return Event(clock + draw_duration(self.rng, mean_duration), EventType.END_IO, self)

    def left_io(self, clock: int) -> None:
        self.time_in_io += self._elapsed(clock)

    def update_statistics(self, statistics: Statistics) -> None:
        self.state = 'EXIT'
        statistics.nof_completed_processes += 1
        statistics.total_time_in_ready_queue += self.time_in_ready_queue
        statistics.total_time_in_cpu += self.time_in_cpu
        statistics.total_time_in_io_queue += self.time_in_io_queue
        statistics.total_time_in_io += self.time_in_io
        statistics.total_nof_times_in_ready_queue += self.nof_times_in_ready_queue
        statistics.total_nof_times_in_io_queue += self.nof_times_in_io_queue

    def __repr__(self) -> str:
        return (f"Process(pid={self.pid}, state={self.state}, cpu={self.time_in_cpu}/{self.cpu_time_needed}, "
                f"next_io={self.time_to_next_io_operation})")
