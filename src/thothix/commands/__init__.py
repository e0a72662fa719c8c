"""CLI commands for thothix."""
