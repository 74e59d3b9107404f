"""Node snapshot loading."""
