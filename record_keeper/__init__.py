"""
Record Keeper - Source Package

A small personal record-keeping tool: named quantities stored one per
line in a plain text file, with every action written to a companion log.

DESIGN PRINCIPLES:
1. The text file is the only state
2. Fail early, fail visibly
3. No silent corrections
4. Every step must be auditable
"""

__version__ = "1.0.0"
__author__ = "Record Keeper Team"
