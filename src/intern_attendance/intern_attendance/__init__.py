"""Intern Attendance package.

Organized by feature modules (attendance, users, reports) with a thin Flask
JSON controller layer on top of service/repository layers. The attendance
rules themselves live in ``attendance.engine`` and do no I/O.
"""
