"""Worked hours per client and the monthly report."""
