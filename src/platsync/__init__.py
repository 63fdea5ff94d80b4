"""platsync - settings reconciliation and credential exchange for hosted database projects."""

__version__ = "0.1.0"
