"""Task management API: tasks, their states and user accounts over HTTP."""

__version__ = "0.1.0"
