"""Timeclock package.

Attendance punches, breaks and admin corrections for multi-company
workforces, organized by feature modules (users, time_records) behind a thin
Flask controller layer and service/repository layers.
"""
