"""
Schedule planner service.

This module builds a single student's schedule from a section catalog.
It orchestrates loading the catalog, converting it to domain objects,
adding the requested sections and summarizing the result.
"""
import logging
import time
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

import pandas as pd

from .config import ScheduleConfig
from .data.converter import DataConverter
from .data.loader import SectionDataLoader
from .exceptions import ConflictError
from .grid import build_busy_grid, busy_minutes
from .models.entities import DAYS, CourseSection, format_minutes
from .models.schedule import ScheduleSet

logger = logging.getLogger(__name__)


class SchedulePlanner:
    """
    Builds a schedule for requested CRNs.

    This class is responsible for:
    - Loading the section catalog
    - Adding requested sections to a ScheduleSet
    - Reporting the schedule summary and timing metrics
    """

    def __init__(self, input_dir: Optional[str] = None, config: Optional[ScheduleConfig] = None):
        """
        Initialize the planner.

        Args:
            input_dir: Directory containing the catalog; defaults to
                       config.input_dir
            config: Configuration, defaults to ScheduleConfig()
        """
        self.config = config or ScheduleConfig()
        self.input_dir = Path(input_dir or self.config.input_dir)

        self.loader = SectionDataLoader(str(self.input_dir), self.config.sections_file)
        self.converter = DataConverter()

        self.catalog: Dict[str, CourseSection] = {}
        self.rejected: List[Tuple[CourseSection, CourseSection]] = []

        self.metrics = {
            'load_time': 0,
            'conversion_time': 0,
            'build_time': 0,
            'total_time': 0
        }

    def load_data(self) -> Dict[str, pd.DataFrame]:
        """
        Load the catalog files.

        Returns:
            Dictionary of DataFrames containing the loaded data
        """
        start_time = time.time()
        logger.info(f"Loading catalog from {self.input_dir}")

        try:
            data = self.loader.load_all()

            self.metrics['load_time'] = time.time() - start_time
            logger.info(f"Catalog loaded in {self.metrics['load_time']:.2f} seconds")

            return data
        except Exception as e:
            logger.error(f"Error loading catalog: {str(e)}")
            raise

    def convert_data(self, data: Dict[str, pd.DataFrame]) -> Dict[str, CourseSection]:
        """
        Convert catalog data to CourseSection objects.

        Args:
            data: Dictionary of DataFrames

        Returns:
            Dictionary mapping CRNs to sections
        """
        start_time = time.time()
        logger.info("Converting catalog to domain model")

        self.catalog = self.converter.convert_sections(data['sections'])

        self.metrics['conversion_time'] = time.time() - start_time
        logger.info(f"Catalog converted in {self.metrics['conversion_time']:.2f} seconds")

        return self.catalog

    def build_schedule(self, crns: Iterable[str], strict: bool = False) -> ScheduleSet:
        """
        Build a schedule from requested CRNs.

        Args:
            crns: Requested section CRNs, in priority order
            strict: If True, any conflict fails the whole build. Otherwise
                    conflicting sections are skipped and recorded in
                    self.rejected.

        Returns:
            ScheduleSet with the requested sections

        Raises:
            KeyError: If a CRN is not in the catalog
            ConflictError: In strict mode, if two requested sections conflict
        """
        start_time = time.time()

        requested = []
        for crn in crns:
            crn = str(crn).strip()
            if crn not in self.catalog:
                logger.error(f"Unknown CRN: {crn}")
                raise KeyError(f"Unknown CRN: {crn}")
            requested.append(self.catalog[crn])

        logger.info(f"Building schedule from {len(requested)} sections")
        self.rejected = []

        if strict:
            schedule = ScheduleSet.from_sections(requested, granularity=self.config.granularity)
        else:
            schedule = ScheduleSet(granularity=self.config.granularity)
            for section in requested:
                try:
                    schedule.add(section)
                except ConflictError as e:
                    logger.info(f"Skipping {e.candidate}: conflicts with {e.existing}")
                    self.rejected.append((e.candidate, e.existing))

        self.metrics['build_time'] = time.time() - start_time
        logger.info(f"Schedule built with {len(schedule)} sections, {schedule.total_credits()} credits")

        return schedule

    def summarize(self, schedule: ScheduleSet) -> Dict[str, Any]:
        """
        Summarize a schedule.

        Args:
            schedule: The schedule to summarize

        Returns:
            Dictionary with counts, credits, time range and busy minutes per day
        """
        grid = build_busy_grid(
            schedule,
            day_start=self.config.day_start,
            day_end=self.config.day_end,
            granularity=schedule.granularity,
        )
        per_day = busy_minutes(grid, schedule.granularity)

        earliest = schedule.earliest_start()
        latest = schedule.latest_end()

        return {
            'section_count': len(schedule),
            'total_credits': schedule.total_credits(),
            'earliest_start': format_minutes(earliest) if earliest is not None else None,
            'latest_end': format_minutes(latest) if latest is not None else None,
            'busy_minutes': {DAYS[d]: int(per_day[d]) for d in range(len(DAYS))},
        }

    def plan(self, crns: Iterable[str], strict: bool = False) -> Dict[str, Any]:
        """
        Run the complete planning process.

        Args:
            crns: Requested section CRNs
            strict: Fail on the first conflict instead of skipping sections

        Returns:
            Dictionary containing the schedule summary and metrics
        """
        total_start_time = time.time()
        logger.info("Starting schedule planning")

        try:
            data = self.load_data()
            self.convert_data(data)
            schedule = self.build_schedule(crns, strict=strict)

            results = {
                'schedule_summary': self.summarize(schedule),
                'sections': self.converter.schedule_to_frame(schedule).to_dict(orient='records'),
                'rejected': [
                    {'crn': candidate.crn, 'conflicts_with': existing.crn}
                    for candidate, existing in self.rejected
                ],
                'metrics': self.metrics,
                'success': True
            }

            self.metrics['total_time'] = time.time() - total_start_time
            logger.info(f"Planning completed in {self.metrics['total_time']:.2f} seconds")

            return results

        except Exception as e:
            logger.error(f"Planning failed: {str(e)}")

            self.metrics['total_time'] = time.time() - total_start_time

            return {
                'error': str(e),
                'metrics': self.metrics,
                'success': False
            }
