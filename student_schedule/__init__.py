"""
Conflict-free course schedules for a single student.
"""
from .exceptions import ScheduleError, InvalidInputError, ConflictError
from .models.entities import DAYS, TimeInterval, MeetingPattern, CourseSection, sections_conflict
from .models.schedule import ScheduleSet

__version__ = "0.1.0"

__all__ = [
    'DAYS', 'TimeInterval', 'MeetingPattern', 'CourseSection', 'sections_conflict',
    'ScheduleSet', 'ScheduleError', 'InvalidInputError', 'ConflictError',
]
