"""HTTP API: router and shared dependencies."""
