"""Task Scheduler: tasks with dates and compact repeat rules."""
