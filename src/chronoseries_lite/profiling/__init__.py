"""Simulation harness and workload generation for chronoseries-lite."""

from chronoseries_lite.profiling.harness import SimulationResult, run_simulation
from chronoseries_lite.profiling.load_generator import Sample, SampleGenerator
from chronoseries_lite.profiling.report import format_report

__all__ = [
    "Sample",
    "SampleGenerator",
    "SimulationResult",
    "format_report",
    "run_simulation",
]
