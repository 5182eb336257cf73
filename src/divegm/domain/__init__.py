"""Domain models and pure rules helpers."""
