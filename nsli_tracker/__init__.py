"""
NSLI Tracker

Tracks Net Sales per Lead Issued (NSLI) for a seller against two goal
thresholds, over four date windows: fiscal year to date, month to date,
rolling 30 days and week to date.
"""

__version__ = "0.1.0"
