"""Live departure countdown slots for Entur stops."""

__version__ = "0.1.0"
