"""4.4BSD scheduler formulas in 17.14 fixed point.

The multi-level feedback queue scheduler recomputes three quantities:

  - load_avg   = (59/60) * load_avg + (1/60) * ready_threads      (every second)
  - recent_cpu = (2*load_avg)/(2*load_avg + 1) * recent_cpu + nice (every second)
  - priority   = PRI_MAX - (recent_cpu / 4) - (nice * 2)          (every 4th tick)

load_avg and recent_cpu are fractional, so they are kept as Fixed values;
priority and nice are plain integers.
"""

from __future__ import annotations

import structlog
from pydantic import BaseModel, Field, StrictInt

from schedmath.math.fixed_point import (
    Fixed,
    add_fp,
    add_mixed,
    div_fp,
    div_mixed,
    fp_to_int,
    fp_to_int_round,
    int_to_fp,
    mult_fp,
    mult_mixed,
    sub_fp,
    sub_mixed,
)

logger = structlog.get_logger()

PRI_MIN = 0
PRI_MAX = 63
NICE_MIN = -20
NICE_MAX = 20
TIMER_FREQ = 100

# Ticks between priority recalculations
TIME_SLICE = 4

# Decay coefficients for the load average
LOAD_AVG_DECAY = div_fp(int_to_fp(59), int_to_fp(60))
LOAD_AVG_WEIGHT = div_fp(int_to_fp(1), int_to_fp(60))


def calculate_priority(recent_cpu: Fixed, nice: int) -> int:
    """priority = PRI_MAX - (recent_cpu / 4) - (nice * 2)

    The result is truncated toward zero and clamped to [PRI_MIN, PRI_MAX].
    """
    fp_priority = sub_fp(int_to_fp(PRI_MAX), div_mixed(recent_cpu, 4))
    fp_priority = sub_mixed(fp_priority, nice * 2)
    return max(PRI_MIN, min(PRI_MAX, fp_to_int(fp_priority)))


def update_load_avg(load_avg: Fixed, ready_threads: int) -> Fixed:
    """load_avg = (59/60) * load_avg + (1/60) * ready_threads

    Args:
        load_avg: Current system load average
        ready_threads: Threads running or ready to run (idle thread excluded)

    Returns:
        The new load average

    Raises:
        ValueError: If ready_threads is negative
    """
    if ready_threads < 0:
        raise ValueError(f"ready_threads must be non-negative, got {ready_threads}")
    return add_fp(mult_fp(LOAD_AVG_DECAY, load_avg), mult_mixed(LOAD_AVG_WEIGHT, ready_threads))


def update_recent_cpu(recent_cpu: Fixed, load_avg: Fixed, nice: int) -> Fixed:
    """recent_cpu = (2*load_avg)/(2*load_avg + 1) * recent_cpu + nice"""
    twice_load = mult_mixed(load_avg, 2)
    coefficient = div_fp(twice_load, add_mixed(twice_load, 1))
    return add_mixed(mult_fp(coefficient, recent_cpu), nice)


def increment_recent_cpu(recent_cpu: Fixed) -> Fixed:
    """Charge one timer tick to the running thread."""
    return add_mixed(recent_cpu, 1)


def load_avg_x100(load_avg: Fixed) -> int:
    """100 times the load average, rounded to the nearest integer."""
    return fp_to_int_round(mult_mixed(load_avg, 100))


def recent_cpu_x100(recent_cpu: Fixed) -> int:
    """100 times recent_cpu, rounded to the nearest integer."""
    return fp_to_int_round(mult_mixed(recent_cpu, 100))


class ThreadLoad(BaseModel):
    """Per-thread scheduler bookkeeping.

    Attributes:
        name: Thread name, for logging
        nice: Niceness in [NICE_MIN, NICE_MAX]; higher yields more CPU to others
        recent_cpu: Exponentially decayed CPU time received (fixed point)
        priority: Current priority in [PRI_MIN, PRI_MAX]
    """

    name: str
    nice: StrictInt = Field(default=0, ge=NICE_MIN, le=NICE_MAX)
    recent_cpu: Fixed = Field(default_factory=lambda: int_to_fp(0))
    priority: StrictInt = Field(default=PRI_MAX, ge=PRI_MIN, le=PRI_MAX)

    model_config = {"arbitrary_types_allowed": True, "validate_assignment": True}

    def tick(self) -> None:
        """Account one timer tick while this thread is running."""
        self.recent_cpu = increment_recent_cpu(self.recent_cpu)

    def decay(self, load_avg: Fixed) -> None:
        """Apply the once-per-second recent_cpu decay."""
        self.recent_cpu = update_recent_cpu(self.recent_cpu, load_avg, self.nice)

    def refresh_priority(self) -> int:
        """Recompute priority from recent_cpu and nice, returning the new value."""
        new_priority = calculate_priority(self.recent_cpu, self.nice)
        if new_priority != self.priority:
            logger.debug(
                "thread_priority_changed",
                thread=self.name,
                old_priority=self.priority,
                new_priority=new_priority,
                recent_cpu=str(self.recent_cpu),
            )
        self.priority = new_priority
        return new_priority

    def set_nice(self, nice: int) -> int:
        """Change niceness and recompute priority immediately."""
        self.nice = nice
        return self.refresh_priority()


def system_tick(
    ticks: int,
    load_avg: Fixed,
    running: ThreadLoad | None,
    threads: list[ThreadLoad],
    ready_threads: int,
) -> Fixed:
    """Apply the per-tick scheduler updates and return the new load average.

    Order matches the reference scheduler: charge the running thread, then on
    each second boundary update load_avg before decaying every thread's
    recent_cpu, then every TIME_SLICE ticks recompute all priorities.

    Args:
        ticks: Timer ticks since boot, including this one
        load_avg: Load average before this tick
        running: The running thread, or None when idle
        threads: All live threads
        ready_threads: Running plus ready threads, idle excluded

    Returns:
        Load average after this tick
    """
    if running is not None:
        running.tick()

    if ticks % TIMER_FREQ == 0:
        load_avg = update_load_avg(load_avg, ready_threads)
        for thread in threads:
            thread.decay(load_avg)
        logger.debug("load_avg_updated", ticks=ticks, load_avg_x100=load_avg_x100(load_avg))

    if ticks % TIME_SLICE == 0:
        for thread in threads:
            thread.refresh_priority()

    return load_avg
