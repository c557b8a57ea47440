#!/usr/bin/env python3
"""
Main entry point for the student schedule builder.
"""
from student_schedule.cli import main


if __name__ == '__main__':
    main()
