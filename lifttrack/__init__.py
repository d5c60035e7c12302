"""Strength-training program core: progression, rest timer, plan validation."""

__version__ = "0.1.0"
