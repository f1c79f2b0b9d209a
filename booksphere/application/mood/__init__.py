"""Mood application module: rule store, resolution and reader preferences."""
