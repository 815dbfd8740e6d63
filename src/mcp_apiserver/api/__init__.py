"""API server packages."""
