"""
officeslots - office working windows and non-overlapping time slots.
"""

__version__ = "0.1.0"
