"""Class Attendance package.

Feature modules (attendance, analytics, reports, ...) sit on top of a narrow
record store interface, with thin Flask controllers and service/repository
layers underneath.
"""
