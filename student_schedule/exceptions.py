"""
Exceptions raised by the student schedule core.
"""


class ScheduleError(Exception):
    """Base class for schedule errors."""


class InvalidInputError(ScheduleError, ValueError):
    """Raised when a section, time or day value is missing or malformed."""


class ConflictError(ScheduleError):
    """
    Raised when a section overlaps a section already in the schedule.

    Attributes:
        existing: The section already in the schedule
        candidate: The section that was being added
    """

    def __init__(self, existing, candidate):
        self.existing = existing
        self.candidate = candidate
        super().__init__(f"Section {candidate} conflicts with {existing} already in the schedule")
