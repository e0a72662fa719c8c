"""Read-only view of the role catalog."""
