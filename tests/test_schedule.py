"""
Tests for the ScheduleSet container.
"""
import logging

import pytest

from student_schedule.exceptions import ConflictError, InvalidInputError
from student_schedule.models.entities import CourseSection, TimeInterval, sections_conflict
from student_schedule.models.schedule import DEFAULT_GRANULARITY, ScheduleSet


def make_section(crn, days, start, end, credits=3, additional=None, course=None):
    """Build a section meeting on days from start to end, with an optional (days, start, end) lab."""
    extra = {}
    if additional:
        add_days, add_start, add_end = additional
        extra = {
            'additional_time': TimeInterval.parse(add_start, add_end),
            'additional_days': add_days,
        }
    return CourseSection(
        crn=crn,
        course=course or f"CS {crn}",
        credits=credits,
        time_slot=TimeInterval.parse(start, end),
        days=days,
        **extra
    )


def arranged_section(crn, credits=3, course="ENGL 1106"):
    return CourseSection(crn=crn, course=course, credits=credits)


class TestScheduleConstruction:
    """Test creating schedules."""

    def test_empty_schedule(self):
        for schedule in (ScheduleSet(), ScheduleSet.empty()):
            assert len(schedule) == 0
            assert schedule.total_credits() == 0
            assert schedule.sections == ()
            assert schedule.earliest_start() is None
            assert schedule.latest_end() is None
            assert schedule.granularity == DEFAULT_GRANULARITY

    def test_from_sections_keeps_order(self):
        a = make_section('1', 'MWF', '10:00', '10:50', credits=3)
        b = make_section('2', 'TR', '09:30', '10:45', credits=4)
        c = make_section('3', 'MWF', '08:00', '08:50', credits=1)

        schedule = ScheduleSet.from_sections([a, b, c])

        assert list(schedule) == [a, b, c]
        assert schedule.sections == (a, b, c)
        assert schedule.total_credits() == 8

    def test_from_sections_conflict_fails(self):
        a = make_section('1', 'M', '09:00', '10:00')
        b = make_section('2', 'M', '09:00', '10:00')

        schedule = None
        with pytest.raises(ConflictError) as exc_info:
            schedule = ScheduleSet.from_sections([a, b])

        assert schedule is None
        assert exc_info.value.existing is a
        assert exc_info.value.candidate is b
        assert 'CS 1 (1)' in str(exc_info.value)
        assert 'CS 2 (2)' in str(exc_info.value)

    def test_constructor_accepts_generator(self):
        sections = (make_section(str(i), 'M', f"{8 + i:02d}:00", f"{8 + i:02d}:50") for i in range(3))
        schedule = ScheduleSet(sections)
        assert len(schedule) == 3

    @pytest.mark.parametrize('granularity', [0, -5, 2.5, True])
    def test_invalid_granularity(self, granularity):
        with pytest.raises(InvalidInputError):
            ScheduleSet(granularity=granularity)


class TestAdd:
    """Test adding sections."""

    def test_add_none(self):
        schedule = ScheduleSet()
        with pytest.raises(InvalidInputError):
            schedule.add(None)
        assert len(schedule) == 0

    def test_invalid_input_is_value_error(self):
        with pytest.raises(ValueError):
            ScheduleSet().add(None)

    def test_add_non_section(self):
        with pytest.raises(InvalidInputError):
            ScheduleSet().add("CS 1114")

    def test_add_updates_credits(self):
        schedule = ScheduleSet()
        schedule.add(make_section('1', 'MWF', '09:05', '09:55', credits=3))
        schedule.add(make_section('2', 'TR', '09:30', '10:45', credits=4))
        assert schedule.total_credits() == 7
        assert len(schedule) == 2

    def test_conflict_leaves_schedule_unchanged(self):
        a = make_section('1', 'MWF', '09:05', '09:55', credits=3)
        b = make_section('2', 'F', '09:30', '10:20', credits=4)
        schedule = ScheduleSet([a])

        with pytest.raises(ConflictError) as exc_info:
            schedule.add(b)

        assert exc_info.value.existing is a
        assert exc_info.value.candidate is b
        assert list(schedule) == [a]
        assert schedule.total_credits() == 3

    def test_rejected_conflict_is_logged_at_info(self, caplog):
        a = make_section('1', 'MWF', '09:05', '09:55')
        b = make_section('2', 'F', '09:30', '10:20')
        schedule = ScheduleSet([a])

        with caplog.at_level(logging.INFO, logger='student_schedule.models.schedule'):
            with pytest.raises(ConflictError):
                schedule.add(b)

        rejected = [r for r in caplog.records if 'Rejected' in r.getMessage()]
        assert len(rejected) == 1
        assert rejected[0].levelno == logging.INFO
        assert '(2)' in rejected[0].getMessage()

    def test_back_to_back_sections(self):
        schedule = ScheduleSet()
        schedule.add(make_section('1', 'M', '09:00', '10:00'))
        schedule.add(make_section('2', 'M', '10:00', '11:00'))
        assert len(schedule) == 2

    def test_same_time_different_days(self):
        schedule = ScheduleSet()
        schedule.add(make_section('1', 'MWF', '09:00', '10:00'))
        schedule.add(make_section('2', 'TR', '09:00', '10:00'))
        assert len(schedule) == 2

    def test_additional_meeting_conflicts(self):
        chem = make_section('1', 'MWF', '13:25', '14:15', credits=4, additional=('R', '14:00', '16:45'))
        physics = make_section('2', 'TR', '15:30', '16:45')
        schedule = ScheduleSet([chem])

        with pytest.raises(ConflictError):
            schedule.add(physics)

    def test_arranged_sections_never_conflict(self):
        schedule = ScheduleSet([make_section('1', 'MTWRF', '08:00', '17:00')])
        schedule.add(arranged_section('2'))
        schedule.add(arranged_section('3'))
        assert len(schedule) == 3

    def test_conflicts_with(self):
        a = make_section('1', 'MWF', '09:05', '09:55')
        schedule = ScheduleSet([a])
        assert schedule.conflicts_with(make_section('2', 'W', '09:00', '09:10')) is a
        assert schedule.conflicts_with(make_section('3', 'W', '10:00', '10:50')) is None
        assert len(schedule) == 1

    def test_custom_conflict_check(self):
        def same_course(first, second):
            return first.course == second.course

        schedule = ScheduleSet(conflict_check=same_course)
        schedule.add(make_section('1', 'M', '09:00', '10:00', course='CS 1114'))
        # Overlapping times are fine under this predicate
        schedule.add(make_section('2', 'M', '09:00', '10:00', course='MATH 1226'))

        with pytest.raises(ConflictError):
            schedule.add(make_section('3', 'F', '15:00', '16:00', course='CS 1114'))


class TestRemove:
    """Test removing sections."""

    def test_add_then_remove_restores_state(self):
        a = make_section('1', 'MWF', '09:05', '09:55', credits=3)
        b = make_section('2', 'TR', '09:30', '10:45', credits=4)
        schedule = ScheduleSet([a])

        schedule.add(b)
        removed = schedule.remove(b)

        assert removed is b
        assert list(schedule) == [a]
        assert schedule.total_credits() == 3

    def test_remove_missing_section(self):
        a = make_section('1', 'MWF', '09:05', '09:55', credits=3)
        missing = make_section('2', 'TR', '09:30', '10:45', credits=4)
        schedule = ScheduleSet([a])

        assert schedule.remove(missing) is None
        assert schedule.total_credits() == 3
        assert len(schedule) == 1

    def test_remove_from_empty_schedule(self):
        schedule = ScheduleSet()
        assert schedule.remove(arranged_section('1')) is None
        assert schedule.total_credits() == 0

    def test_remove_uses_value_equality(self):
        a = make_section('1', 'MWF', '09:05', '09:55', credits=3)
        same = make_section('1', 'FWM', '09:05', '09:55', credits=3)
        schedule = ScheduleSet([a])

        assert same == a
        assert schedule.remove(same) is a
        assert len(schedule) == 0

    def test_sections_with_same_times_are_distinct(self):
        first = arranged_section('1')
        second = arranged_section('2')
        schedule = ScheduleSet([first, second])

        schedule.remove(second)

        assert list(schedule) == [first]
        assert second not in schedule
        assert first in schedule

    def test_credits_track_membership(self):
        pool = [
            make_section('1', 'MWF', '08:00', '08:50', credits=3),
            make_section('2', 'MWF', '08:30', '09:20', credits=4),
            make_section('3', 'TR', '09:30', '10:45', credits=3),
            make_section('4', 'R', '10:00', '12:00', credits=1),
            arranged_section('5', credits=2),
            make_section('6', 'MW', '16:00', '17:15', credits=3),
        ]
        operations = [
            ('add', 0), ('add', 1), ('add', 2), ('add', 3), ('add', 4),
            ('remove', 0), ('add', 1), ('add', 3), ('remove', 2), ('add', 3),
            ('add', 5), ('remove', 3), ('remove', 3), ('add', 0),
        ]

        schedule = ScheduleSet()
        for op, idx in operations:
            if op == 'add':
                try:
                    schedule.add(pool[idx])
                except ConflictError:
                    pass
            else:
                schedule.remove(pool[idx])

            members = list(schedule)
            assert schedule.total_credits() == sum(s.credits for s in members)
            for i, first in enumerate(members):
                for second in members[i + 1:]:
                    assert not sections_conflict(first, second)


class TestTimeQueries:
    """Test earliest/latest and busy queries."""

    def test_earliest_start(self):
        schedule = ScheduleSet([
            make_section('1', 'M', '09:00', '09:50'),
            make_section('2', 'T', '08:00', '08:50'),
        ])
        assert schedule.earliest_start() == 8 * 60

    def test_latest_end_includes_additional_time(self):
        schedule = ScheduleSet([
            make_section('1', 'MWF', '13:25', '14:15', additional=('R', '14:00', '16:45')),
            make_section('2', 'TR', '09:30', '10:45'),
        ])
        assert schedule.latest_end() == 16 * 60 + 45
        assert schedule.earliest_start() == 9 * 60 + 30

    def test_earliest_start_includes_additional_time(self):
        schedule = ScheduleSet([
            make_section('1', 'MWF', '13:25', '14:15', additional=('R', '07:30', '08:20')),
        ])
        assert schedule.earliest_start() == 7 * 60 + 30

    def test_only_arranged_sections(self):
        schedule = ScheduleSet([arranged_section('1'), arranged_section('2')])
        assert schedule.earliest_start() is None
        assert schedule.latest_end() is None

    def test_is_busy_boundaries(self):
        schedule = ScheduleSet([make_section('1', 'MWF', '09:00', '09:50')])
        start, end = 540, 590

        assert schedule.is_busy(0, start)
        assert schedule.is_busy(0, start + 25)
        assert schedule.is_busy(0, end - DEFAULT_GRANULARITY)
        assert not schedule.is_busy(0, end)
        assert not schedule.is_busy(0, start - DEFAULT_GRANULARITY)

        assert schedule.is_busy(2, start)
        assert not schedule.is_busy(1, start)

    def test_is_busy_additional_days(self):
        schedule = ScheduleSet([
            make_section('1', 'MWF', '13:25', '14:15', additional=('R', '14:00', '16:45')),
        ])
        assert schedule.is_busy(3, 14 * 60)
        assert schedule.is_busy(3, 16 * 60 + 40)
        assert not schedule.is_busy(3, 16 * 60 + 45)
        assert not schedule.is_busy(3, 13 * 60 + 30)

    def test_is_busy_custom_granularity(self):
        schedule = ScheduleSet([make_section('1', 'M', '09:00', '10:00')], granularity=10)
        assert schedule.is_busy(0, 590)
        assert not schedule.is_busy(0, 595)

    def test_is_busy_empty(self):
        schedule = ScheduleSet()
        assert not any(schedule.is_busy(day, 600) for day in range(5))

    @pytest.mark.parametrize('day', [-1, 5, 7, '0', True])
    def test_is_busy_invalid_day(self, day):
        with pytest.raises(InvalidInputError):
            ScheduleSet().is_busy(day, 600)


class TestCopy:
    """Test copying schedules."""

    def test_copy_matches_source(self):
        schedule = ScheduleSet([
            make_section('1', 'MWF', '13:25', '14:15', credits=4, additional=('R', '14:00', '16:45')),
            make_section('2', 'TR', '09:30', '10:45', credits=3),
            arranged_section('3', credits=1),
        ])

        copied = schedule.copy()

        assert copied is not schedule
        assert list(copied) == list(schedule)
        assert copied.total_credits() == schedule.total_credits()
        assert copied.earliest_start() == schedule.earliest_start()
        assert copied.latest_end() == schedule.latest_end()

    def test_copy_is_independent(self):
        schedule = ScheduleSet([make_section('1', 'M', '09:00', '10:00')])
        copied = schedule.copy()

        copied.add(make_section('2', 'T', '09:00', '10:00'))

        assert len(schedule) == 1
        assert len(copied) == 2

    def test_copy_keeps_settings(self):
        def never(first, second):
            return False

        schedule = ScheduleSet(conflict_check=never, granularity=15)
        copied = schedule.copy()
        assert copied.conflict_check is never
        assert copied.granularity == 15

    def test_copy_revalidates(self):
        a = make_section('1', 'M', '09:00', '10:00')
        b = make_section('2', 'M', '09:30', '10:30')
        schedule = ScheduleSet([a, b], conflict_check=lambda first, second: False)

        schedule.conflict_check = sections_conflict

        with pytest.raises(ConflictError):
            schedule.copy()

    def test_repr(self):
        schedule = ScheduleSet([make_section('10001', 'M', '09:00', '10:00', credits=3)])
        assert repr(schedule) == "ScheduleSet([10001], credits=3)"
