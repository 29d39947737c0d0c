import os
import re
import subprocess
import sys
import pytest


def run_case(sysconfig, *extra):
    repo_root = os.path.dirname(os.path.dirname(__file__))
    sysconfig_path = os.path.join(repo_root, sysconfig)
    result = subprocess.run(
        [sys.executable, os.path.join(repo_root, 'rrscheduler.py'), sysconfig_path, *extra],
        capture_output=True,
        text=True,
        cwd=repo_root,
        check=False,
    )
    assert result.returncode == 0, f"Return code {result.returncode}, stderr: {result.stderr}"
    lines = [ln.strip() for ln in result.stdout.splitlines() if ln.strip()]
    assert lines, 'No output'
    last = lines[-1]
    m = re.match(r"^measurements\s+(\d+)\s+(\d+)\s+(\d+)$", last)
    assert m, f"Malformed measurements line: {last}\nFull output:\n{result.stdout}"
    return int(m.group(1)), int(m.group(2)), int(m.group(3)), result.stdout


def report_value(stdout, label):
    m = re.search(re.escape(label) + r":\s+([\d.]+)", stdout)
    assert m, f"{label} missing from report"
    return float(m.group(1))


@pytest.mark.parametrize(
    'sysconfig,length',
    [
        ('examples/sysconfig.txt', 250000),
        ('examples/sysconfig_tiny_quantum.txt', 100000),
        ('examples/sysconfig_io_heavy.txt', 200000),
        ('examples/sysconfig_defaults.txt', 250000),
    ],
)
def test_scenarios(sysconfig, length):
    time_us, cpu, io_ops, stdout = run_case(sysconfig)
    assert time_us == length
    assert 0 <= cpu <= 100
    assert io_ops > 0
    assert report_value(stdout, "Number of processed I/O operations") == io_ops
    assert report_value(stdout, "Largest occurring I/O queue length") >= report_value(stdout, "Average I/O queue length")


def test_same_seed_same_output():
    first = run_case('examples/sysconfig.txt', '--seed', '5')
    second = run_case('examples/sysconfig.txt', '--seed', '5')
    assert first == second


def test_slow_device_queues_more_than_fast_device():
    *_, fast = run_case('examples/sysconfig.txt')
    *_, slow = run_case('examples/sysconfig_io_heavy.txt')
    assert report_value(slow, "Average I/O queue length") > report_value(fast, "Average I/O queue length")
