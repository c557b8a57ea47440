"""
Busy/free grid for a schedule.

The grid has one row per week day and one column per granularity slot
between day_start and day_end. A cell is True when the schedule is busy
at the start of that slot.
"""
import logging
from typing import List, Optional, Tuple

import numpy as np

from .exceptions import InvalidInputError
from .models.entities import DAYS, MINUTES_PER_DAY
from .models.schedule import ScheduleSet

logger = logging.getLogger(__name__)


def slot_minutes(day_start: int, day_end: int, granularity: int) -> np.ndarray:
    """Return the starting minute of every slot in [day_start, day_end)."""
    if granularity <= 0:
        raise InvalidInputError(f"Granularity must be positive, got {granularity}")
    if not 0 <= day_start < day_end <= MINUTES_PER_DAY:
        raise InvalidInputError(f"Invalid grid bounds: {day_start}-{day_end}")
    if day_start % granularity or day_end % granularity:
        raise InvalidInputError(
            f"Grid bounds {day_start}-{day_end} are not multiples of {granularity} minutes"
        )
    return np.arange(day_start, day_end, granularity)


def build_busy_grid(schedule: ScheduleSet,
                    day_start: int = 7 * 60,
                    day_end: int = 22 * 60,
                    granularity: Optional[int] = None) -> np.ndarray:
    """
    Build the busy/free grid of a schedule.

    Args:
        schedule: Schedule to inspect
        day_start: First minute of the grid
        day_end: Minute where the grid stops (exclusive)
        granularity: Slot size in minutes, defaults to the schedule's

    Returns:
        Boolean array of shape (5, n_slots)
    """
    if granularity is None:
        granularity = schedule.granularity

    minutes = slot_minutes(day_start, day_end, granularity)
    grid = np.zeros((len(DAYS), len(minutes)), dtype=bool)

    for day in range(len(DAYS)):
        for col, minute in enumerate(minutes):
            grid[day, col] = schedule.is_busy(day, int(minute))

    logger.debug(f"Built busy grid with {int(grid.sum())} busy slots out of {grid.size}")
    return grid


def busy_minutes(grid: np.ndarray, granularity: int) -> np.ndarray:
    """Busy minutes per day."""
    return grid.sum(axis=1) * granularity


def free_blocks(grid: np.ndarray, day: int, day_start: int, granularity: int) -> List[Tuple[int, int]]:
    """
    List the free stretches of one day.

    Args:
        grid: Grid returned by build_busy_grid
        day: Day index (row of the grid)
        day_start: First minute of the grid
        granularity: Slot size used to build the grid

    Returns:
        (start_minute, end_minute) pairs, end exclusive
    """
    if not 0 <= day < grid.shape[0]:
        raise InvalidInputError(f"Day index must be 0-{grid.shape[0] - 1}, got {day}")

    row = grid[day]
    blocks = []
    start = None

    for col, busy in enumerate(row):
        if not busy and start is None:
            start = col
        elif busy and start is not None:
            blocks.append((day_start + start * granularity, day_start + col * granularity))
            start = None

    if start is not None:
        blocks.append((day_start + start * granularity, day_start + len(row) * granularity))

    return blocks
