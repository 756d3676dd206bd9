"""Endurance training plan computation and regeneration."""

__version__ = "0.1.0"
