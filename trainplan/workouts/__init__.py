"""Workout content providers."""
