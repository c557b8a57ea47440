"""
Entity models for the student schedule.
These classes describe the course sections a schedule is built from and
the weekly meeting times they occupy.
"""
import re
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple, Union

from ..exceptions import InvalidInputError

# Day indices are positional in this ordering
DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri")
DAY_CODES = "MTWRF"

MINUTES_PER_DAY = 24 * 60

_CLOCK_PATTERN = re.compile(r'^\s*(\d{1,2}):?(\d{2})\s*([AaPp][Mm])?\s*$')
_DAY_SEPARATORS = re.compile(r'[\s,;/]+')


def clock_to_minutes(value: str) -> int:
    """
    Convert a clock time to minutes since midnight.

    Accepts 24 hour times ("09:05", "24:00", "0905") and 12 hour times
    ("9:05am", "1:30 PM").

    Args:
        value: Clock time string

    Returns:
        Minute of the day
    """
    match = _CLOCK_PATTERN.match(str(value))
    if not match:
        raise InvalidInputError(f"Invalid time format: {value!r}")

    hour = int(match.group(1))
    minute = int(match.group(2))
    meridiem = match.group(3)

    if minute > 59:
        raise InvalidInputError(f"Invalid time value: {value!r}")

    if meridiem:
        if not 1 <= hour <= 12:
            raise InvalidInputError(f"Invalid time value: {value!r}")
        hour = hour % 12
        if meridiem.lower() == 'pm':
            hour += 12
    elif hour > 24 or (hour == 24 and minute != 0):
        raise InvalidInputError(f"Invalid time value: {value!r}")

    return hour * 60 + minute


def format_minutes(minutes: int) -> str:
    """Format minutes since midnight as HH:MM."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def day_index(day: Union[int, str]) -> int:
    """
    Resolve a day to its index in DAYS.

    Args:
        day: Index (0-4), single letter code from "MTWRF" or a day name
             such as "Thu" or "Thursday"

    Returns:
        Day index, 0 = Monday
    """
    if isinstance(day, bool):
        raise InvalidInputError(f"Invalid day: {day!r}")

    if isinstance(day, int):
        if 0 <= day < len(DAYS):
            return day
        raise InvalidInputError(f"Day index must be 0-4 (Mon-Fri), got {day}")

    name = str(day).strip()
    if len(name) == 1 and name.upper() in DAY_CODES:
        return DAY_CODES.index(name.upper())

    if len(name) >= 3:
        for idx, day_name in enumerate(DAYS):
            if name[:3].lower() == day_name.lower():
                return idx

    raise InvalidInputError(f"Unknown day: {day!r}")


def parse_days(value: Union[None, str, Iterable[Union[int, str]]]) -> Tuple[int, ...]:
    """
    Parse a set of meeting days into a sorted tuple of day indices.

    Strings may be letter codes in either case ("MWF", "tr"), separated
    names ("Mon, Wed"), a single name ("Friday") or a mix ("MW, Fri").
    """
    if value is None:
        return ()

    if isinstance(value, str):
        tokens = [t for t in _DAY_SEPARATORS.split(value.strip()) if t]
    else:
        tokens = list(value)

    indices = set()
    for token in tokens:
        # Day names never consist of code letters only, so clusters are safe to split
        if isinstance(token, str) and all(c in DAY_CODES for c in token.upper()):
            indices.update(day_index(c) for c in token)
        else:
            indices.add(day_index(token))

    return tuple(sorted(indices))


@dataclass(frozen=True)
class TimeInterval:
    """A span of one day, as minute offsets from midnight."""
    start: int
    end: int

    def __post_init__(self) -> None:
        if not isinstance(self.start, int) or not isinstance(self.end, int):
            raise InvalidInputError("Interval bounds must be integer minutes")
        if not 0 <= self.start < self.end <= MINUTES_PER_DAY:
            raise InvalidInputError(
                f"Interval must satisfy 0 <= start < end <= {MINUTES_PER_DAY}, "
                f"got {self.start}-{self.end}"
            )

    @classmethod
    def parse(cls, start: str, end: str) -> "TimeInterval":
        """Build an interval from two clock time strings."""
        return cls(clock_to_minutes(start), clock_to_minutes(end))

    @property
    def duration(self) -> int:
        return self.end - self.start

    def overlaps(self, other: "TimeInterval") -> bool:
        # Touching endpoints do not overlap
        return self.start < other.end and other.start < self.end

    def contains(self, minute: int) -> bool:
        return self.start <= minute < self.end

    def __str__(self) -> str:
        return f"{format_minutes(self.start)}-{format_minutes(self.end)}"


@dataclass(frozen=True)
class MeetingPattern:
    """A time interval repeated on a set of week days."""
    interval: TimeInterval
    days: Tuple[int, ...]

    def meets_on(self, day: int) -> bool:
        return day in self.days

    def overlaps(self, other: "MeetingPattern") -> bool:
        """Check if both patterns occupy overlapping time on a shared day."""
        if not set(self.days) & set(other.days):
            return False
        return self.interval.overlaps(other.interval)


@dataclass(frozen=True)
class CourseSection:
    """
    Represents one offering of a course.

    A section meets on a primary time slot and optionally on a second,
    independent time slot (e.g. a separate lab). Sections without a time
    slot are arranged/TBA and never conflict with anything.
    """
    crn: str
    course: str
    credits: int
    time_slot: Optional[TimeInterval] = None
    days: Tuple[int, ...] = ()
    additional_time: Optional[TimeInterval] = None
    additional_days: Tuple[int, ...] = ()
    title: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.credits, bool) or not isinstance(self.credits, int) or self.credits < 0:
            raise InvalidInputError(f"Credits must be a non-negative integer, got {self.credits!r}")

        # Normalize day sets so equal sections compare equal
        object.__setattr__(self, 'days', parse_days(self.days))
        object.__setattr__(self, 'additional_days', parse_days(self.additional_days))

        if (self.time_slot is None) != (not self.days):
            raise InvalidInputError(f"Section {self.crn}: time slot and days must be given together")
        if (self.additional_time is None) != (not self.additional_days):
            raise InvalidInputError(f"Section {self.crn}: additional time and days must be given together")
        if self.additional_time is not None and self.time_slot is None:
            raise InvalidInputError(f"Section {self.crn}: additional time requires a primary time slot")

    @property
    def is_arranged(self) -> bool:
        """Check if the section has no fixed meeting time."""
        return self.time_slot is None

    def meetings(self) -> Iterator[MeetingPattern]:
        """Yield the section's weekly meeting patterns."""
        if self.time_slot is not None:
            yield MeetingPattern(self.time_slot, self.days)
        if self.additional_time is not None:
            yield MeetingPattern(self.additional_time, self.additional_days)

    def conflicts(self, other: "CourseSection") -> bool:
        """Check if any meeting of this section overlaps a meeting of another."""
        return any(
            mine.overlaps(theirs)
            for mine in self.meetings()
            for theirs in other.meetings()
        )

    def __str__(self) -> str:
        return f"{self.course} ({self.crn})"


def sections_conflict(first: CourseSection, second: CourseSection) -> bool:
    """Default conflict predicate used by ScheduleSet."""
    return first.conflicts(second)
