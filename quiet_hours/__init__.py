"""Quiet Hours Scheduler: quiet block study sessions with email reminders."""

__version__ = "0.1.0"
