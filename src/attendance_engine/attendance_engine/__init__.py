"""Attendance Engine package.

This package is organized by feature modules (attendance, hours, clock, summary)
with a thin Flask controller layer and pure calculation/service layers.
"""
