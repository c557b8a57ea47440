"""
Data converter module.

Handles conversions between the catalog DataFrame and domain objects:
- DataFrame rows to CourseSection objects
- A ScheduleSet back to a DataFrame
"""
import logging
from typing import Dict, Optional

import pandas as pd

from ..exceptions import InvalidInputError
from ..models.entities import DAYS, CourseSection, TimeInterval
from ..models.schedule import ScheduleSet

logger = logging.getLogger(__name__)

# Time cells meaning "no fixed meeting time"
ARRANGED_MARKERS = {'', 'TBA', 'ARR', 'ONLINE', 'NAN'}


def parse_credits(value) -> int:
    """
    Parse a credit value such as "3" or "3.0".

    Raises InvalidInputError unless the value is a non-negative whole number.
    """
    try:
        number = float(str(value).strip())
    except ValueError:
        raise InvalidInputError(f"Invalid credits: {value!r}")
    # NaN and infinity fail this check too
    if not number >= 0 or number % 1 != 0:
        raise InvalidInputError(f"Invalid credits: {value!r}")
    return int(number)


class DataConverter:
    """
    Converts between the catalog representation and the domain model.
    """

    @staticmethod
    def _is_arranged(value) -> bool:
        if value is None or (isinstance(value, float) and pd.isna(value)):
            return True
        return str(value).strip().upper() in ARRANGED_MARKERS

    @classmethod
    def _parse_meeting(cls, days, start, end):
        if cls._is_arranged(start) and cls._is_arranged(end):
            return None, ()
        if cls._is_arranged(days):
            raise InvalidInputError("Meeting time given without days")
        return TimeInterval.parse(str(start), str(end)), str(days)

    @classmethod
    def convert_section(cls, row) -> CourseSection:
        """
        Convert one catalog row to a CourseSection.

        Args:
            row: Mapping with the catalog columns

        Returns:
            CourseSection object
        """
        time_slot, days = cls._parse_meeting(row.get('Days'), row.get('Start Time'), row.get('End Time'))
        additional_time, additional_days = cls._parse_meeting(
            row.get('Additional Days'),
            row.get('Additional Start Time'),
            row.get('Additional End Time'),
        )

        credits = parse_credits(row.get('Credits', '0'))

        return CourseSection(
            crn=str(row['CRN']).strip(),
            course=str(row.get('Course', '')).strip(),
            title=str(row.get('Title', '') or '').strip(),
            credits=credits,
            time_slot=time_slot,
            days=days,
            additional_time=additional_time,
            additional_days=additional_days,
        )

    @classmethod
    def convert_sections(cls, sections_df: pd.DataFrame) -> Dict[str, CourseSection]:
        """
        Convert the section catalog DataFrame to CourseSection objects.

        Rows that cannot be parsed are logged and skipped. When a CRN
        appears more than once the first row wins.

        Args:
            sections_df: DataFrame containing section data

        Returns:
            Dictionary mapping CRNs to CourseSection objects
        """
        sections = {}

        for idx, row in sections_df.iterrows():
            try:
                section = cls.convert_section(row)
            except (InvalidInputError, KeyError) as e:
                logger.warning(f"Skipping catalog row {idx}: {e}")
                continue

            if section.crn in sections:
                logger.warning(f"Duplicate CRN {section.crn} in catalog, keeping the first row")
                continue

            sections[section.crn] = section

        logger.info(f"Converted {len(sections)} sections")
        return sections

    @staticmethod
    def _format_days(days) -> str:
        return ",".join(DAYS[d] for d in days)

    @staticmethod
    def _format_interval(interval: Optional[TimeInterval]) -> str:
        return str(interval) if interval is not None else ''

    @classmethod
    def schedule_to_frame(cls, schedule: ScheduleSet) -> pd.DataFrame:
        """
        Convert a schedule to a DataFrame with one row per section.

        Args:
            schedule: ScheduleSet to convert

        Returns:
            DataFrame in schedule order
        """
        rows = []
        for section in schedule:
            rows.append({
                'CRN': section.crn,
                'Course': section.course,
                'Title': section.title,
                'Credits': section.credits,
                'Days': cls._format_days(section.days),
                'Time': cls._format_interval(section.time_slot),
                'Additional Days': cls._format_days(section.additional_days),
                'Additional Time': cls._format_interval(section.additional_time),
            })

        columns = ['CRN', 'Course', 'Title', 'Credits', 'Days', 'Time', 'Additional Days', 'Additional Time']
        return pd.DataFrame(rows, columns=columns)
