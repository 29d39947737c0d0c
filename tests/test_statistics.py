from machine.statistics import Statistics


def test_empty_run_report_has_no_division_errors():
    stats = Statistics()
    lines = stats.report()
    assert lines[0] == "Simulation statistics:"
    assert stats.measurements() == (0, 0, 0)
    assert any("Average I/O queue length:" in ln and "0.0000" in ln for ln in lines)


def test_averages_use_simulation_length():
    stats = Statistics()
    stats.simulation_length = 1000
    stats.total_busy_cpu_time = 250
    stats.io_queue_length_time = 3000
    stats.nof_processed_io_operations = 7
    assert stats.cpu_utilisation() == 25.0
    assert stats.measurements() == (1000, 25, 7)
    assert any("Average I/O queue length:" in ln and ln.endswith("3.0000") for ln in stats.report())


def test_report_counts_all_process_switches():
    stats = Statistics()
    stats.nof_process_switches = 4
    assert any(ln.startswith("Number of process switches:") and ln.endswith(" 4") for ln in stats.report())
    assert not any("(forced)" in ln for ln in stats.report())
