"""
Setup script for the student schedule builder.
"""
from setuptools import setup, find_packages

setup(
    name="student-schedule",
    version="0.1.0",
    description="Conflict-free course schedules for a single student",
    author="Optimo MSIS",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.22.0",
        "pandas>=1.4.0",
        "python-dotenv>=0.19.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=2.0.0",
            "black>=22.0.0",
            "mypy>=0.900"
        ],
    },
    entry_points={
        "console_scripts": [
            "student-schedule=student_schedule.cli:main",
        ],
    },
)
