"""Classroom ledger package.

Feature modules (attendance, points, accounts, locks, students) each expose a
repository protocol, a MySQL repository, a service and a thin Flask controller.
"""
