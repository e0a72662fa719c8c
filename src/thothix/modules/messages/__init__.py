"""Channel messages and direct messages."""
