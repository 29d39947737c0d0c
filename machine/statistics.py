from typing import List, Tuple


class Statistics:
    """Accumulators shared by the CPU, the I/O device and the driver.

    One instance lives for one simulation run. Counters and time integrals
    only ever grow.
    """

    def __init__(self):
        self.nof_created_processes = 0
        self.nof_completed_processes = 0
        self.nof_process_switches = 0
        self.nof_processed_io_operations = 0

        self.cpu_queue_length_time = 0
        self.cpu_queue_largest_length = 0
        self.io_queue_length_time = 0
        self.io_queue_largest_length = 0

        self.total_busy_cpu_time = 0
        self.total_time_in_ready_queue = 0
        self.total_time_in_cpu = 0
        self.total_time_in_io_queue = 0
        self.total_time_in_io = 0
        self.total_nof_times_in_ready_queue = 0
        self.total_nof_times_in_io_queue = 0

        self.simulation_length = 0

    @staticmethod
    def _ratio(num, den) -> float:
        return num / den if den > 0 else 0.0

    def cpu_utilisation(self) -> float:
        return 100.0 * self._ratio(self.total_busy_cpu_time, self.simulation_length)

    def measurements(self) -> Tuple[int, int, int]:
        return (self.simulation_length, int(self.cpu_utilisation()), self.nof_processed_io_operations)

    def report(self) -> List[str]:
        length = self.simulation_length
        done = self.nof_completed_processes
        busy = self.cpu_utilisation()
        idle = 100.0 - busy if length > 0 else 0.0
        lines = [
            "Simulation statistics:",
            "",
            f"Number of completed processes:                                {done}",
            f"Number of created processes:                                  {self.nof_created_processes}",
            f"Number of process switches:                                   {self.nof_process_switches}",
            f"Number of processed I/O operations:                           {self.nof_processed_io_operations}",
            f"Average throughput (processes per second):                    "
            f"{1_000_000 * self._ratio(done, length):.4f}",
            "",
            f"Total CPU time spent processing:                              {self.total_busy_cpu_time} us",
            f"Fraction of CPU time spent processing:                        {busy:.2f}%",
            f"Total CPU time spent waiting:                                 {length - self.total_busy_cpu_time} us",
            f"Fraction of CPU time spent waiting:                           {idle:.2f}%",
            "",
            f"Largest occurring CPU queue length:                           {self.cpu_queue_largest_length}",
            f"Average CPU queue length:                                     "
            f"{self._ratio(self.cpu_queue_length_time, length):.4f}",
            f"Largest occurring I/O queue length:                           {self.io_queue_largest_length}",
            f"Average I/O queue length:                                     "
            f"{self._ratio(self.io_queue_length_time, length):.4f}",
            "",
            f"Average # of times a process has been placed in CPU queue:   "
            f"{self._ratio(self.total_nof_times_in_ready_queue, done):.4f}",
            f"Average # of times a process has been placed in I/O queue:   "
            f"{self._ratio(self.total_nof_times_in_io_queue, done):.4f}",
            "",
            f"Average time spent in system per process:                     "
            f"{self._ratio(self.total_time_in_ready_queue + self.total_time_in_cpu + self.total_time_in_io_queue + self.total_time_in_io, done):.2f} us",
            f"Average time spent in CPU queue per process:                  "
            f"{self._ratio(self.total_time_in_ready_queue, done):.2f} us",
            f"Average time spent processing per process:                    "
            f"{self._ratio(self.total_time_in_cpu, done):.2f} us",
            f"Average time spent in I/O queue per process:                  "
            f"{self._ratio(self.total_time_in_io_queue, done):.2f} us",
            f"Average time spent in I/O per process:                        "
            f"{self._ratio(self.total_time_in_io, done):.2f} us",
        ]
        return lines

    def __repr__(self):
        return (f"Statistics(created={self.nof_created_processes}, completed={self.nof_completed_processes}, "
                f"io_ops={self.nof_processed_io_operations}, switches={self.nof_process_switches})")
