"""Channels and channel membership."""
