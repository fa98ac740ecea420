"""
Core domain models for the NSLI tracker.

Entries are the system of record; goals, windows and aggregates are
derived from them or configured alongside them.
"""
