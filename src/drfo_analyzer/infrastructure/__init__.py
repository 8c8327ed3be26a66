"""Infrastructure adapters (file reading and XML parsing)."""
