"""Accumulating and reporting per-kernel execution times."""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping

from .log_setup import LOGGER_NAME

TimingMap = Dict[str, float]


def join(tm1: Mapping[str, float], tm2: Mapping[str, float]) -> TimingMap:
    """Return a new map with the times of both maps summed per name."""
    joined = dict(tm1)
    for name, seconds in tm2.items():
        joined[name] = joined.get(name, 0.0) + seconds
    return joined


def total_time(tm: Mapping[str, float]) -> float:
    """Sum of all times in the map."""
    return sum(tm.values(), 0.0)


def format_timings(tm: Mapping[str, float]) -> List[str]:
    """Report lines, fastest kernel first, followed by the total."""
    lines = [
        f"kernel execution time for {name:<30} is {seconds:<10.5f} secs"
        for name, seconds in sorted(tm.items(), key=lambda item: item[1])
    ]
    lines.append(f"total kernel execution time is {total_time(tm):g} secs")
    return lines


def log_timings(tm: Mapping[str, float]) -> None:
    """Write the timing report to the package logger at info level."""
    logger = logging.getLogger(LOGGER_NAME)
    for line in format_timings(tm):
        logger.info(line)