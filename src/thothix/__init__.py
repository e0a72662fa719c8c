"""Thothix: role-based access control for projects, channels and users."""

__version__ = "0.1.0"
