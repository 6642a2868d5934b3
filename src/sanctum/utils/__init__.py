"""Shared helpers for dates, units, and timers."""
