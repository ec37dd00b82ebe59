"""Talent Radar: find and rank GitHub developers for hiring requirements."""

__version__ = "0.1.0"
