"""
Lab Autograder: light structural grading for an HTML lab assignment.

Checks a student's markup for required tags and attributes, awards
proportional credit per rubric step, and adds a deadline-based
submission score.
"""

__version__ = "0.1.0"
