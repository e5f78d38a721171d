"""Core enforcement modules."""
