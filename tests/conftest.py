"""
Shared fixtures for catalog based tests.
"""
import os
import shutil
import tempfile

import pandas as pd
import pytest


CATALOG_ROWS = [
    # CRN, Course, Title, Credits, Days, Start, End, Additional Days, Additional Start, Additional End
    ('10001', 'CS 1114', 'Intro to Software Design', 3, 'MWF', '09:05', '09:55', '', '', ''),
    ('10002', 'CS 2114', 'Software Design and Data Structures', 3, 'TR', '09:30', '10:45', '', '', ''),
    ('10003', 'MATH 1226', 'Calculus of a Single Variable', 4, 'MWF', '09:05', '09:55', '', '', ''),
    ('10004', 'CHEM 1035', 'General Chemistry', 4, 'MWF', '13:25', '14:15', 'R', '14:00', '16:45'),
    ('10005', 'ENGL 1106', 'First Year Writing', 3, 'TBA', 'TBA', 'TBA', '', '', ''),
    ('10006', 'PHYS 2305', 'Foundations of Physics', 4, 'TR', '15:30', '16:45', '', '', ''),
    ('00107', 'MUS 1104', 'Music Appreciation', 1, 'W', '6:00pm', '8:45pm', '', '', ''),
]

CATALOG_COLUMNS = [
    'CRN', 'Course', 'Title', 'Credits', 'Days', 'Start Time', 'End Time',
    'Additional Days', 'Additional Start Time', 'Additional End Time',
]


def write_catalog(directory, rows=CATALOG_ROWS, columns=CATALOG_COLUMNS, filename='Sections.csv'):
    """Write a section catalog CSV into directory."""
    catalog_df = pd.DataFrame(list(rows), columns=columns)
    catalog_df.to_csv(os.path.join(directory, filename), index=False)


@pytest.fixture
def empty_dir():
    """Create a temporary directory."""
    temp_dir = tempfile.mkdtemp()

    yield temp_dir

    shutil.rmtree(temp_dir)


@pytest.fixture
def catalog_dir(empty_dir):
    """Create a temporary directory with a section catalog."""
    write_catalog(empty_dir)
    return empty_dir
