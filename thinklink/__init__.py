"""thinklink - natural-language command interpreter for task management."""

__version__ = "0.1.0"
