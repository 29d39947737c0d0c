# System configuration file parser
import re
from dataclasses import dataclass
from typing import Optional


class ConfigError(ValueError):
    def __init__(self, path: str, lineno: int, message: str):
        super().__init__(f"{path}:{lineno}: {message}")
        self.path = path
        self.lineno = lineno


@dataclass
class SimulationConfig:
    simulation_length: int = 250000     # microseconds
    max_cpu_time: int = 500             # time quantum
    avg_io_time: int = 225
    avg_arrival_interval: int = 5000
    seed: Optional[int] = None


# keyword -> SimulationConfig attribute
_KEYS = {
    'simulationlength': 'simulation_length',
    'timequantum': 'max_cpu_time',
    'avgiotime': 'avg_io_time',
    'avgarrivalinterval': 'avg_arrival_interval',
    'seed': 'seed',
}


def _parse_int(path: str, lineno: int, text: str) -> int:
    value = re.sub(r'(usecs|usec)$', '', text)
    try:
        return int(value)
    except ValueError:
        raise ConfigError(path, lineno, f"expected an integer, got {text!r}") from None


def parse_sysconfig(path: str) -> SimulationConfig:
    config = SimulationConfig()
    with open(path, 'r') as fh:
        for lineno, line in enumerate(fh, start=1):
            line = line.strip()
            if not line or line.startswith('#'):
                continue
            parts = re.split(r'\s+', line)
            key = parts[0].lower()
            if key not in _KEYS:
                raise ConfigError(path, lineno, f"unknown setting {parts[0]!r}")
            if len(parts) != 2:
                raise ConfigError(path, lineno, f"{parts[0]} takes exactly one value")
            value = _parse_int(path, lineno, parts[1])
            if key != 'seed' and value <= 0:
                raise ConfigError(path, lineno, f"{parts[0]} must be positive")
            setattr(config, _KEYS[key], value)
    return config
