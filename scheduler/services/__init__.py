"""Recurrence engine and task persistence services."""
