"""Workforce package.

Feature modules (sessions, attendance, payroll, permissions, ...) each carry
their own model, repository interface, MySQL repository and service, with a
thin Flask controller layer on top.
"""
