"""Connection management."""
