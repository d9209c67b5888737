"""Presentation and orchestration layer of the flight planner."""

__version__ = "1.0.0"
