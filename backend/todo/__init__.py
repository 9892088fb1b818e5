"""Session-authenticated multi-user to-do list manager."""

__version__ = "0.1.0"
