"""Report generation for simulation results.

Formats SimulationResult data into a human-readable table for terminal
output.
"""
from __future__ import annotations

from chronoseries_lite.profiling.harness import SimulationResult


def _ratio(part: int, whole: int) -> str:
    if whole <= 0:
        return "n/a"
    return f"{part / whole * 100:.1f}%"


def format_report(result: SimulationResult, label: str = "Simulation") -> str:
    """Format a SimulationResult as a readable report string."""
    slots = result.ticks_held * result.num_series
    lines = [
        f"=== {label} ===",
        f"Ticks recorded:    {result.total_ticks:,}",
        f"Ticks held:        {result.ticks_held:,}",
        f"Series:            {result.num_series:,}",
        f"Record time:       {result.record_time_ms:.1f} ms",
        f"Throughput:        {result.ticks_per_sec:,.0f} ticks/sec",
        f"",
        f"Storage:",
        f"  Values stored:   {result.values_stored:,} ({_ratio(result.values_stored, slots)} of slots)",
        f"  Gaps skipped:    {result.gaps_skipped:,}",
        f"  Chunks:          {result.chunks:,}",
        f"  Checkpoints:     {result.checkpoints_held:,}",
        f"  Chunked bytes:   {result.chunked_bytes:,}",
        f"  Placeholder:     {result.placeholder_bytes:,} bytes "
        f"(chunked uses {_ratio(result.chunked_bytes, result.placeholder_bytes)})",
    ]
    return "\n".join(lines)
