"""Supporting services."""
