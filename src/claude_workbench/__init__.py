"""Live view over agent task and plan files."""

__version__ = "0.1.0"
