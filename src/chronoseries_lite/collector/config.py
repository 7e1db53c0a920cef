"""Collector configuration.

Plain dataclass, validated on construction. The CLI maps its flags onto
these fields one-to-one.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta


@dataclass(slots=True)
class CollectorConfig:
    """How often to checkpoint, and how much history to keep.

    checkpoint_every: take a time-axis checkpoint every N ticks. This is
        also the precision of age-based pruning: retained history can be
        older than `retention` by up to N ticks' worth of time.
    retention: maximum age to keep, or None to keep everything.
    prune_every: run retention every N ticks (ignored without retention).
    shrink_after_prune: release spare list capacity after each prune.
    """
    checkpoint_every: int = 60
    retention: timedelta | None = None
    prune_every: int = 60
    shrink_after_prune: bool = False

    def __post_init__(self) -> None:
        if self.checkpoint_every < 1:
            raise ValueError(
                f"checkpoint_every must be >= 1, got {self.checkpoint_every}"
            )
        if self.prune_every < 1:
            raise ValueError(f"prune_every must be >= 1, got {self.prune_every}")
        if self.retention is not None and self.retention <= timedelta(0):
            raise ValueError(f"retention must be positive, got {self.retention}")
