"""sanctum: workout tracking and training calendar projection."""

__version__ = "0.1.0"
