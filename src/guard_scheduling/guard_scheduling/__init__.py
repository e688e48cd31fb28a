"""Guard Scheduling package.

Organized by feature modules (shifts, employees, attendance) with pure
domain logic at the center, repository adapters for MySQL, and a thin Flask
JSON layer on top.
"""
