"""taskboard: a single-user task manager with a console client."""

__version__ = "0.1.0"
