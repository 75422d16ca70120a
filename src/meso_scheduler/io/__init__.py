"""Settings storage and input parsing."""
