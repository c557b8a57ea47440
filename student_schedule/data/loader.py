import logging
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from ..exceptions import InvalidInputError
from .converter import parse_credits

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ['CRN', 'Course', 'Credits', 'Days', 'Start Time', 'End Time']
OPTIONAL_COLUMNS = ['Title', 'Additional Days', 'Additional Start Time', 'Additional End Time']


class SectionDataLoader:
    """
    Handles loading and validating the section catalog from CSV files.
    """

    def __init__(self, input_dir: Optional[str] = None, sections_file: str = 'Sections.csv'):
        """
        Initialize the data loader.

        Args:
            input_dir: Directory containing the catalog CSV file
            sections_file: Name of the catalog file inside input_dir
        """
        self.input_dir = Path(input_dir) if input_dir else Path.cwd()
        self.sections_file = sections_file

        # Initialize data dictionary
        self.data = {}

        if not self.input_dir.exists():
            logger.error(f"Input directory not found at {self.input_dir}")
            raise FileNotFoundError(f"Input directory not found at {self.input_dir}")

        logger.info("Data loader initialized successfully")

    @property
    def sections_path(self) -> Path:
        return self.input_dir / self.sections_file

    def load_sections(self) -> pd.DataFrame:
        """
        Load the section catalog.

        All columns are read as strings so compact times like "0900"
        and leading zeros in CRNs survive.
        """
        try:
            logger.info("Loading section catalog...")

            sections = pd.read_csv(
                self.sections_path,
                dtype=str,
                keep_default_na=False,
                skipinitialspace=True,
            )
        except FileNotFoundError as e:
            logger.error(f"Missing input file: {e.filename}")
            raise
        except pd.errors.EmptyDataError:
            logger.error(f"Section catalog is empty: {self.sections_path}")
            raise InvalidInputError(f"Section catalog is empty: {self.sections_path}")

        sections.columns = [str(c).strip() for c in sections.columns]

        missing = [c for c in REQUIRED_COLUMNS if c not in sections.columns]
        if missing:
            logger.error(f"Section catalog is missing columns: {missing}")
            raise InvalidInputError(f"Section catalog is missing columns: {', '.join(missing)}")

        for column in OPTIONAL_COLUMNS:
            if column not in sections.columns:
                sections[column] = ''

        for column in sections.columns:
            sections[column] = sections[column].astype(str).str.strip()

        self.data['sections'] = sections
        logger.info(f"Sections loaded: {len(sections)} records")
        return sections

    def validate(self) -> List[str]:
        """
        Validate the loaded catalog.
        Checks for:
        - Duplicate CRNs
        - Credits that are not non-negative integers

        Returns:
            List of validation issues
        """
        logger.info("Validating section catalog...")
        validation_issues = []

        sections = self.data['sections']

        duplicated = sections.loc[sections['CRN'].duplicated(), 'CRN'].unique()
        if len(duplicated):
            issue = f"Duplicate CRNs in catalog: {sorted(duplicated)}"
            validation_issues.append(issue)
            logger.warning(issue)

        for crn, value in zip(sections['CRN'], sections['Credits']):
            try:
                parse_credits(value)
            except InvalidInputError:
                issue = f"Section {crn} has invalid credits"
                validation_issues.append(issue)
                logger.warning(issue)

        if not validation_issues:
            logger.info("Section catalog is valid")
        else:
            logger.warning(f"Found {len(validation_issues)} validation issues")

        return validation_issues

    def load_all(self) -> Dict[str, pd.DataFrame]:
        """
        Load and validate all catalog data.

        Returns:
            Dict: Dictionary containing all loaded dataframes
        """
        try:
            logger.info("Starting data load process...")
            self.load_sections()
            issues = self.validate()

            if issues:
                logger.warning(f"Data loaded with {len(issues)} validation issues")
            else:
                logger.info("Data loaded and validated successfully")

            return self.data

        except Exception as e:
            logger.error(f"Error during data loading: {str(e)}")
            raise
