"""Core package - settings and the model catalog."""
