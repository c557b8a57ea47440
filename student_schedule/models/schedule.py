"""
Schedule container for a single student.

A ScheduleSet holds an ordered list of course sections and guarantees that
no two of them meet at overlapping times. It also tracks the total credit
hours and answers time based queries (earliest start, latest end, busy slots).
"""
import logging
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from ..exceptions import ConflictError, InvalidInputError
from .entities import DAYS, CourseSection, sections_conflict

logger = logging.getLogger(__name__)

# Minimum schedulable time unit, in minutes
DEFAULT_GRANULARITY = 5

ConflictCheck = Callable[[CourseSection, CourseSection], bool]


class ScheduleSet:
    """
    An ordered, conflict-free set of course sections.

    The section list is private; sections enter only through add() so the
    no-overlap invariant holds after every call.
    """

    def __init__(self,
                 sections: Iterable[CourseSection] = (),
                 conflict_check: ConflictCheck = sections_conflict,
                 granularity: int = DEFAULT_GRANULARITY):
        """
        Create a schedule, optionally filled from existing sections.

        Args:
            sections: Sections to add in order. Construction fails with
                ConflictError if any two of them conflict.
            conflict_check: Symmetric predicate telling whether two sections
                overlap in time
            granularity: Minimum schedulable time unit in minutes, used by
                is_busy() to exclude the end slot of a meeting
        """
        if isinstance(granularity, bool) or not isinstance(granularity, int) or granularity <= 0:
            raise InvalidInputError(f"Granularity must be a positive integer, got {granularity!r}")

        self._sections: List[CourseSection] = []
        self._total_credits = 0
        self.conflict_check = conflict_check
        self.granularity = granularity

        for section in sections:
            self.add(section)

    @classmethod
    def empty(cls, **kwargs) -> "ScheduleSet":
        """Create a schedule with no sections and zero credits."""
        return cls(**kwargs)

    @classmethod
    def from_sections(cls, sections: Iterable[CourseSection], **kwargs) -> "ScheduleSet":
        """
        Create a schedule from a sequence of sections.

        Either every section is added or ConflictError is raised and no
        schedule is returned.
        """
        return cls(sections, **kwargs)

    @property
    def sections(self) -> Tuple[CourseSection, ...]:
        return tuple(self._sections)

    def conflicts_with(self, section: CourseSection) -> Optional[CourseSection]:
        """
        Find the first section in the schedule that conflicts with a section.

        Args:
            section: Candidate section

        Returns:
            The conflicting member, or None if the section fits
        """
        for member in self._sections:
            if self.conflict_check(member, section):
                return member
        return None

    def add(self, section: CourseSection) -> None:
        """
        Add a section to the schedule.

        Args:
            section: The section to add

        Raises:
            InvalidInputError: If section is None or not a CourseSection
            ConflictError: If section conflicts with the schedule
        """
        if section is None:
            raise InvalidInputError("Section is None when adding to schedule")
        if not isinstance(section, CourseSection):
            raise InvalidInputError(f"Expected a CourseSection, got {type(section).__name__}")

        existing = self.conflicts_with(section)
        if existing is not None:
            logger.info(f"Rejected {section}: conflicts with {existing}")
            raise ConflictError(existing, section)

        self._sections.append(section)
        self._total_credits += section.credits
        logger.debug(f"Added {section}, total credits {self._total_credits}")

    def remove(self, section: CourseSection) -> Optional[CourseSection]:
        """
        Remove the first section equal to the given one.

        Credits are only subtracted when a section was actually removed.

        Args:
            section: The section to remove

        Returns:
            The removed section, or None if it was not in the schedule
        """
        for idx, member in enumerate(self._sections):
            if member == section:
                del self._sections[idx]
                self._total_credits -= member.credits
                logger.debug(f"Removed {member}, total credits {self._total_credits}")
                return member

        logger.debug(f"Remove ignored, {section} is not in the schedule")
        return None

    def total_credits(self) -> int:
        return self._total_credits

    def earliest_start(self) -> Optional[int]:
        """
        The earliest start time over all meetings of all sections.

        Returns:
            Minute of the day, or None if no section has a meeting time
        """
        starts = [meeting.interval.start
                  for section in self._sections
                  for meeting in section.meetings()]
        return min(starts) if starts else None

    def latest_end(self) -> Optional[int]:
        """
        The latest end time over all meetings of all sections.

        Returns:
            Minute of the day, or None if no section has a meeting time
        """
        ends = [meeting.interval.end
                for section in self._sections
                for meeting in section.meetings()]
        return max(ends) if ends else None

    def is_busy(self, day: int, minute: int) -> bool:
        """
        Check if the schedule is busy at a minute of a day.

        A meeting occupies every slot from its start up to and including
        end - granularity, so the end slot itself is free.

        Args:
            day: Day index, 0 = Monday through 4 = Friday
            minute: Minute of the day

        Returns:
            True if some section meets at that time
        """
        if isinstance(day, bool) or not isinstance(day, int) or not 0 <= day < len(DAYS):
            raise InvalidInputError(f"Day index must be 0-4 (Mon-Fri), got {day!r}")

        for section in self._sections:
            for meeting in section.meetings():
                if not meeting.meets_on(day):
                    continue
                if meeting.interval.start <= minute <= meeting.interval.end - self.granularity:
                    return True
        return False

    def copy(self) -> "ScheduleSet":
        """
        Create a copy of the schedule.

        Sections are re-added through add(), so the copy is validated the
        same way as any other schedule.
        """
        return ScheduleSet(self._sections,
                           conflict_check=self.conflict_check,
                           granularity=self.granularity)

    def __len__(self) -> int:
        return len(self._sections)

    def __iter__(self) -> Iterator[CourseSection]:
        return iter(tuple(self._sections))

    def __contains__(self, section) -> bool:
        return section in self._sections

    def __repr__(self) -> str:
        crns = ", ".join(section.crn for section in self._sections)
        return f"ScheduleSet([{crns}], credits={self._total_credits})"
