"""Status monitor that gathers Linux system readings into one status line."""

__version__ = "1.1"