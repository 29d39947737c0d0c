"""
rrscheduler.py


Discrete-event simulation of a single-CPU system with one I/O device.


Processes arrive at random intervals, share the CPU in round-robin time
slices and periodically leave it to perform I/O. The I/O device serves one
request at a time from a FIFO queue. At the end of the run a report of
queue lengths, utilisation and per-process times is printed.


Usage:
python rrscheduler.py sysconfig.txt [-v] [--seed N]
"""


import argparse
import logging
import sys

from sysconf.parser import ConfigError, parse_sysconfig
from machine.system import System


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='rrscheduler (DES-based round-robin CPU / I/O simulator)')
    parser.add_argument('sysconfig', help='Path to sysconfig file')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging of DES events')
    parser.add_argument('--seed', type=int, default=None, help='Random seed (overrides the sysconfig file)')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        config = parse_sysconfig(args.sysconfig)
    except (ConfigError, OSError) as e:
        print(f"rrscheduler: {e}", file=sys.stderr)
        return 2
    if args.seed is not None:
        config.seed = args.seed

    print(f"simulation length is {config.simulation_length}")
    print(f"time quantum is {config.max_cpu_time}")
    print(f"average I/O time is {config.avg_io_time}")
    print(f"average arrival interval is {config.avg_arrival_interval}")

    statistics = System(config).start()
    for line in statistics.report():
        print(line)
    total_time, cpu_util, io_ops = statistics.measurements()
    print(f"measurements {total_time} {cpu_util} {io_ops}")
    return 0


# ------------------------------- CLI ---------------------------------
if __name__ == '__main__':
    sys.exit(main())
