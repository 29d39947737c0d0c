import heapq
import logging
import random
from typing import List, Optional

from machine.device import make_io_device
from machine.event import Event, EventType
from machine.process import Process, draw_duration
from machine.scheduler import make_cpu
from machine.statistics import Statistics
from sysconf.parser import SimulationConfig

logger = logging.getLogger(__name__)


class System:
    def __init__(self, config: SimulationConfig):
        self.config = config
        self.rng = random.Random(config.seed)

        # DES structures
        self.current_time = 0
        self.event_queue: List[Event] = []
        self._next_pid = 1
        self._event_counter = 0

        self.statistics = Statistics()
        self.cpu = make_cpu(config.max_cpu_time, self.statistics)
        self.io = make_io_device(config.avg_io_time, self.statistics)
        self.process_table = {}

        self._handlers = {
            EventType.NEW_PROCESS: self._handle_new_process,
            EventType.SWITCH_PROCESS: self._handle_switch_process,
            EventType.END_PROCESS: self._handle_end_process,
            EventType.IO_REQUEST: self._handle_io_request,
            EventType.END_IO: self._handle_end_io,
        }

    # event queue helpers
    def push_event(self, ev: Optional[Event]) -> Optional[Event]:
        if ev is None:
            return None
        self._event_counter += 1
        ev.order = self._event_counter
        heapq.heappush(self.event_queue, ev)
        logger.debug("[t=%s] enqueue %r", self.current_time, ev)
        return ev

    def pop_event(self) -> Optional[Event]:
        if not self.event_queue:
            return None
        return heapq.heappop(self.event_queue)

    def create_process(self) -> Process:
        p = Process(self._next_pid, self.current_time, self.rng)
        self._next_pid += 1
        self.process_table[p.pid] = p
        self.statistics.nof_created_processes += 1
        return p

    def advance_clock(self, time: int) -> None:
        elapsed = time - self.current_time
        # queue lengths are sampled before this instant's events are handled,
        # also when elapsed is 0
        self.cpu.time_passed(elapsed)
        self.io.time_passed(elapsed)
        self.current_time = time

    # start
    def start(self) -> Statistics:
        self.push_event(Event(0, EventType.NEW_PROCESS))
        return self.run()

    # main DES loop
    def run(self) -> Statistics:
        length = self.config.simulation_length
        while self.event_queue and self.event_queue[0].time <= length:
            ev = self.pop_event()
            self.advance_clock(ev.time)
            logger.debug("[t=%s] handle %r", self.current_time, ev)
            handler = self._handlers.get(ev.type)
            if handler is None:
                raise ValueError(f"Unknown event type {ev.type}")
            handler(ev)

        self.advance_clock(max(length, self.current_time))
        self.statistics.simulation_length = self.current_time
        logger.info("simulation finished at t=%s: %r", self.current_time, self.statistics)
        return self.statistics

    # handlers
    def _handle_new_process(self, ev: Event):
        p = self.create_process()
        logger.debug("  pid=%s created, needs %sus cpu", p.pid, p.cpu_time_needed)
        self.push_event(self.cpu.insert_process(p, self.current_time))
        interval = draw_duration(self.rng, self.config.avg_arrival_interval)
        self.push_event(Event(self.current_time + interval, EventType.NEW_PROCESS))

    def _handle_switch_process(self, ev: Event):
        self.push_event(self.cpu.switch_process(self.current_time))

    def _handle_end_process(self, ev: Event):
        p = self.cpu.remove_active_process(self.current_time)
        p.update_statistics(self.statistics)
        logger.debug("  pid=%s finished", p.pid)
        self.push_event(self.cpu.switch_process(self.current_time))

    def _handle_io_request(self, ev: Event):
        p = self.cpu.remove_active_process(self.current_time)
        self.push_event(self.io.submit(p, self.current_time))
        self.push_event(self.cpu.switch_process(self.current_time))

    def _handle_end_io(self, ev: Event):
        p = self.io.remove_active_process()
        p.left_io(self.current_time)
        self.push_event(self.cpu.insert_process(p, self.current_time))
        self.push_event(self.io.start_io_operation(self.current_time))
